"""OpenAI-compatible tag generation client"""

import logging

from openai import OpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from mdmeta.config import Settings
from mdmeta.errors import GenerationError


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a helpful marketing expert that generates relevant tags for blog posts.

You will be provided a frontmatter JSON object for a blog post.
Analyze the provided frontmatter and suggest the tags most relevant for SEO and content discovery.

RULES:
- Return ONLY a JSON object with a "tags" array, no other format is acceptable
- Use 1-3 tags that are specific and relevant to the blog post
- Do not use generic words like "blog", "post", "article"
- Derive the tags from the frontmatter title, description and slug

EXAMPLE RESPONSE:
{"tags": ["tag1", "tag2", "tag3"]}
"""


class TagResponse(BaseModel):
    """Expected shape of the model's JSON reply."""
    tags: list[str]


class TagClient:
    """Blocking chat-completion client; one request per call, no retries."""

    def __init__(self, settings: Settings) -> None:
        if not settings.api_key:
            raise ValueError("Missing API key: set OPENAI_API_KEY or MDMETA_API_KEY")
        self.settings = settings
        self._client = OpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url,
            max_retries=0,
        )

    def generate(self, prompt: str) -> list[str]:
        """Send the prompt and return the validated tag list."""
        logger.debug("Requesting tags from %s (model=%s)", self.settings.base_url, self.settings.model)
        try:
            response = self._client.chat.completions.create(
                model=self.settings.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except OpenAIError as e:
            raise GenerationError(f"Failed to generate tags with AI: {e}") from e

        if not response.choices:
            raise GenerationError("Failed to generate tags with AI: no choices in response")
        content = response.choices[0].message.content or ""
        try:
            return TagResponse.model_validate_json(content).tags
        except ValidationError as e:
            raise GenerationError(f"Failed to generate tags with AI: invalid response: {e}") from e
