"""Errors raised by the Merlin client."""

from openai import OpenAIError


class MerlinConfigError(OpenAIError):
    """Client construction failed because of missing or unsafe configuration."""
