"""
Command-line interface for Outpainter
"""
