# interlinear/api/__init__.py
"""HTTP read surface over the interlinear query API."""
