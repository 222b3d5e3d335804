from .font_provider import FontProvider, LoadOnce, default_font_provider
from .font_registry import EmbeddedFonts, register_fonts

__all__ = ["FontProvider", "LoadOnce", "EmbeddedFonts", "default_font_provider", "register_fonts"]
