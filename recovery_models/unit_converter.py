class UnitConverter:
    """Utility for converting distances between miles and kilometres."""

    MILES_TO_KM = 1.60934

    @staticmethod
    def miles_to_km(miles: float) -> float:
        return miles * UnitConverter.MILES_TO_KM

    @staticmethod
    def km_to_miles(km: float) -> float:
        return km / UnitConverter.MILES_TO_KM
