"""
End-to-end auto-fill of document forms from the shipment dataset.
"""

from .pipeline import AutoFillPipeline

__all__ = [
    "AutoFillPipeline",
]
