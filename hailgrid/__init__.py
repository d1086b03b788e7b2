"""Gridded hail climatology from NEXRAD hail-signature detections."""

__version__ = "0.1.0"
