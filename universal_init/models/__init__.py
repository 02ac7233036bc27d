"""Data models for universal-init."""
from universal_init.models.settings import InitSettings, TemplateChoice

__all__ = ['InitSettings', 'TemplateChoice']
