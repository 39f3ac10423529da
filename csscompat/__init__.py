"""Browser support analysis for CSS snippets."""

from ._version import __version__
from .analyzer import analyze_css_support
from .compat_data import KnowledgeBase, load_knowledge_base
from .model import AnalysisResult, Browser, FeatureUsage

__all__ = [
    "AnalysisResult",
    "Browser",
    "FeatureUsage",
    "KnowledgeBase",
    "__version__",
    "analyze_css_support",
    "load_knowledge_base",
]
