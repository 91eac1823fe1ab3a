"""Categorization prompts loaded from YAML codebooks.

A codebook file looks like::

    prompt:
      description:
        - Classify the sentiment of the review.
      values:
        - label: positive
          description: The reviewer is satisfied.
        - label: negative
          description: The reviewer is dissatisfied.
      default_value: unknown

and renders to a list of system-context strings for an LLMCaller.
"""

from collections.abc import Callable
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from aitomics.exceptions import ConfigurationError


class CategoryValue(BaseModel):
    label: str
    description: str


class CategorizationPrompt(BaseModel):
    description: list[str] = Field(default_factory=list)
    values: list[CategoryValue]
    default_value: str


PromptTemplate = Callable[[list[str], list[CategoryValue], str], list[str]]


def default_prompt_template(
    descriptions: list[str], values: list[CategoryValue], default_value: str
) -> list[str]:
    return [
        *descriptions,
        *(f"'{value.label}': {value.description}" for value in values),
        f"If nothing is applicable only return the value '{default_value}'",
    ]


def load_categorization_prompt(path: str | Path) -> CategorizationPrompt:
    """Load and validate the ``prompt`` section of a codebook file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict) or "prompt" not in data:
        raise ConfigurationError("Prompt file needs a top-level 'prompt' key", source=str(path))
    try:
        return CategorizationPrompt.model_validate(data["prompt"])
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid prompt definition: {e}", source=str(path)) from e


def parse_categorization_prompt(
    path: str | Path, template: PromptTemplate = default_prompt_template
) -> list[str]:
    """Render a codebook file into system-context strings."""
    prompt = load_categorization_prompt(path)
    return template(prompt.description, prompt.values, prompt.default_value)
