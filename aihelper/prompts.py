"""
Prompt templates.

PromptTemplates holds the built-in static templates; DynamicPromptStore holds
templates registered at runtime. Clients accept any object exposing
`get(key) -> str` as a template store.
"""

from typing import Dict, List, Protocol

from aihelper.llm.types import TemplateNotFoundError


class PromptTemplates:
    """Built-in templates for generate_with_template()."""

    SUMMARIZE = "Summarize the following text:"
    EXPLAIN = "Explain this concept in simple terms:"
    BLOG_POST = "Write a blog post about the following topic:"
    CODE_REVIEW = "Review the following code and suggest improvements:"


class TemplateStore(Protocol):
    def get(self, key: str) -> str:
        ...


class DynamicPromptStore:
    """Runtime registry of named prompt templates."""

    def __init__(self, templates: Dict[str, str] = None):
        self._templates: Dict[str, str] = dict(templates or {})

    def add(self, key: str, template: str) -> None:
        """Register or replace a template."""
        self._templates[key] = template

    def get(self, key: str) -> str:
        """
        Raises:
            TemplateNotFoundError: No template registered under `key`
        """
        try:
            return self._templates[key]
        except KeyError:
            raise TemplateNotFoundError(f"Prompt with key '{key}' not found.") from None

    def remove(self, key: str) -> None:
        self._templates.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._templates.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)
