"""Gemini-backed AI review for a single file."""

import asyncio
import json
import logging

import google.generativeai as genai

from scanner.models import StaticResult

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
RETRY_DELAY = 60

REVIEW_INSTRUCTIONS = """You are a senior code reviewer. Analyze the code along these dimensions:

1. 🐛 **Code Quality**: bugs, edge cases, error handling, syntax errors
2. 🔒 **Security**: SQL injection, XSS, hardcoded secrets
3. ⚡ **Performance**: inefficient algorithms, memory leaks
4. 📐 **Best Practices**: naming, structure, maintainability
5. 📖 **Readability**: clarity, documentation

For every problem give constructive feedback in this format:
📍 Line: the line number of the problem
⚠️ Issue: what is wrong
💡 Suggestion: how to change it
"""


def build_prompt(code: str, file_name: str, static_result: StaticResult) -> str:
    findings = json.dumps([f.to_dict() for f in static_result.issues], indent=2)
    return f"""Review this file: {file_name}

Code:
```
{code}
```

Static Analysis found {static_result.summary.total} issues:
{findings}"""


class GeminiReviewer:
    """Async callable with the ``(code, file_name, static_result) -> text`` shape."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.0-flash",
        max_output_tokens: int = 4000,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY,
    ):
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name, system_instruction=REVIEW_INSTRUCTIONS)
        self.max_output_tokens = max_output_tokens
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    async def __call__(self, code: str, file_name: str, static_result: StaticResult) -> str:
        prompt = build_prompt(code, file_name, static_result)

        for attempt in range(1, self.max_retries + 1):
            try:
                response = await self.model.generate_content_async(
                    prompt,
                    generation_config=genai.types.GenerationConfig(
                        max_output_tokens=self.max_output_tokens,
                        temperature=0.1,
                    ),
                )
                return response.text
            except Exception as e:
                if "429" in str(e) and attempt < self.max_retries:
                    logger.warning(
                        "⚠️ Rate limited on %s (attempt %d/%d). Retrying in %ss...",
                        file_name, attempt, self.max_retries, self.retry_delay,
                    )
                    await asyncio.sleep(self.retry_delay)
                else:
                    raise
