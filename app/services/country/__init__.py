from app.services.country.analysis import CountryAnalysisService

__all__ = ["CountryAnalysisService"]
