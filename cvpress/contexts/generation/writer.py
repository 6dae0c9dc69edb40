"""
Resume writer: asks a language model for a resume tailored to a job description.

The provider is injected by the caller; this module holds no client of its own.
Replies are post-processed into plain text ready for the parser:
1. If the reply wraps resume blocks in "---" fences, keep the text before the
   first fence plus the fenced blocks (drops commentary around them)
2. Strip Markdown markup
"""

import re
import time

from cvpress.contexts.generation.exceptions import GenerationError
from cvpress.contexts.generation.logger import (
    _log_debug,
    _log_error,
    log_generation_result,
    log_generation_start,
)
from cvpress.contexts.generation.prompts import SYSTEM_PROMPT, build_user_prompt
from cvpress.utils.llm import LLMProvider
from cvpress.utils.markdown import strip_markup

FENCED_BLOCK = re.compile(r"---\n([\s\S]*?)\n---")


def extract_resume_blocks(message: str) -> str:
    """
    Keep the header plus "---"-fenced blocks of a model reply.

    Replies without fenced blocks are returned unchanged.

    Example:
        >>> extract_resume_blocks("Jane Doe\\n---\\nEXPERIENCE\\n---\\nHope this helps!")
        'Jane Doe\\n\\nEXPERIENCE'
    """
    blocks = FENCED_BLOCK.findall(message)
    if not blocks:
        return message

    header = message.split("---")[0].strip()
    content = "\n\n".join(block.strip() for block in blocks)
    return f"{header}\n\n{content}"


class ResumeWriter:
    """
    Generates tailored resume text through an LLM provider.

    Args:
        provider: Any LLMProvider (see cvpress.utils.llm.get_provider)
        strip: Strip Markdown from the reply (default: True)

    Example:
        >>> writer = ResumeWriter(get_provider("openai"))
        >>> text = writer.generate(current_resume, job_description)
    """

    def __init__(self, provider: LLMProvider, strip: bool = True):
        self.provider = provider
        self.strip = strip

    def generate(self, current_resume: str, job_description: str) -> str:
        """
        Produce resume text tailored to the job description.

        Raises:
            GenerationError: If either input is empty, the provider call fails,
                or the reply has no content
        """
        if not current_resume.strip():
            raise GenerationError("Current resume is empty")
        if not job_description.strip():
            raise GenerationError("Job description is empty")

        provider_name = getattr(self.provider, "name", type(self.provider).__name__)
        log_generation_start(provider_name, len(current_resume), len(job_description))

        start = time.time()
        try:
            response = self.provider.generate(
                SYSTEM_PROMPT, build_user_prompt(current_resume, job_description)
            )
        except Exception as error:
            _log_error(f"Provider call failed: {type(error).__name__}: {error}")
            raise GenerationError(
                "Resume generation failed", provider=provider_name, original_error=error
            ) from error
        log_generation_result(response, time.time() - start)

        message = (response.content or "").strip()
        if not message:
            raise GenerationError("Provider returned an empty reply", provider=provider_name)

        message = extract_resume_blocks(message)
        if self.strip:
            message = strip_markup(message)
        if not message.strip():
            raise GenerationError("Reply contained no resume text", provider=provider_name)
        _log_debug(f"Post-processed reply: {len(message.splitlines())} lines")
        return message
