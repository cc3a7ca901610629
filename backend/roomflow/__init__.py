"""Roomflow: room phase tracking for interior design projects."""
