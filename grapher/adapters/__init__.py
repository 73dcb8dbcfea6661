from .normalize import normalize_pairs, normalize_xy

__all__ = ["normalize_pairs", "normalize_xy"]
