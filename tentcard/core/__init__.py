"""Core services: classification, resolution, pagination, fold layout, PDF."""
from tentcard.core.classifier import classify
from tentcard.core.fold_layout import FoldLayoutEngine
from tentcard.core.paginator import paginate
from tentcard.core.resolver import MetadataResolver

__all__ = ["FoldLayoutEngine", "MetadataResolver", "classify", "paginate"]
