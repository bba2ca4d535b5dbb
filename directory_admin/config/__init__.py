"""Configuration module for the directory admin application."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]
