"""
sigsort - canonical member ordering for signature declaration files

Sorts the members of class, module and interface declarations in RBS-style
stub files into a fixed category order: type aliases, constants, nested
declarations, mixins, variables, attributes, then methods grouped by scope
and visibility.
"""

__version__ = "0.1.0"

# Only expose version by default - everything else is lazy loaded
__all__ = ["__version__"]


def __getattr__(name):
    """Lazy loading of the main API so ``import sigsort`` stays cheap."""
    if name in {"SigSort", "SortResult"}:
        from .api import SigSort, SortResult
        return {"SigSort": SigSort, "SortResult": SortResult}[name]

    if name in {"SigsortConfig", "ConfigurationError"}:
        from .config import ConfigurationError, SigsortConfig
        return {"SigsortConfig": SigsortConfig, "ConfigurationError": ConfigurationError}[name]

    if name in {"Category", "sort_members", "sort_declaration", "sort_declarations", "is_sorted"}:
        from . import sorter
        return getattr(sorter, name)

    if name in {"SigsortError", "SerializationError"}:
        from . import errors
        return getattr(errors, name)

    raise AttributeError(f"module 'sigsort' has no attribute '{name}'")


__all__ = [
    "__version__",
    "SigSort",
    "SortResult",
    "SigsortConfig",
    "ConfigurationError",
    "Category",
    "sort_members",
    "sort_declaration",
    "sort_declarations",
    "is_sorted",
    "SigsortError",
    "SerializationError",
]
