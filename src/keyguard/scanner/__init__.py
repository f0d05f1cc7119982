"""Secret-detection engine: patterns, heuristics, and scan orchestration."""
