from theme_helper.services.schema import SchemaValidationError
from theme_helper.services.schema_types import SchemaType
from theme_helper.services.structured_data import StructuredData
from theme_helper.services.theme import Theme, ThemeManager, current_theme, theme_structured_data

__all__ = [
    'SchemaType',
    'SchemaValidationError',
    'StructuredData',
    'Theme',
    'ThemeManager',
    'current_theme',
    'theme_structured_data',
]
