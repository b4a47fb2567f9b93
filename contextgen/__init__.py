"""contextgen: deterministic canonical context for code projects."""

from .context.schema import ENGINE_VERSION as __version__
from .pipeline import AnalysisResult, Pipeline, analyze_mapping, analyze_path

__all__ = ["AnalysisResult", "Pipeline", "__version__", "analyze_mapping", "analyze_path"]
