from app.services.purpose.analysis import PURPOSE_NAMES, PurposeAnalysisService

__all__ = ["PURPOSE_NAMES", "PurposeAnalysisService"]
