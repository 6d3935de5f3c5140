from .extraction_pipeline import ExtractionPipeline

__all__ = ["ExtractionPipeline"]
