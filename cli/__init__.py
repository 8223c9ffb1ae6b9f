"""CLI package for Book Friends"""
from .main import cli

__all__ = ['cli']
