"""
Shared helpers for Outpainter
"""
