"""
Utility modules

Note: To keep a one-way dependency hierarchy, high-level helpers are not
re-exported here. Import them directly from their module:

    from md_translator.utils.file_utils import translate_markdown

    config → prompts → core → utils
"""

__all__ = []
