"""Dash page layouts."""

from .main_layout import create_main_layout

__all__ = ["create_main_layout"]
