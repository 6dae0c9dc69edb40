"""
Generation Context

Responsibilities:
- Builds prompts that ask a language model to tailor a resume to a job description
- Calls an injected LLM provider (no process-wide client)
- Post-processes replies into plain text for the parsing context

Owns: Prompt wording, reply clean-up, generation errors
Never: Parses resume structure or draws pages
"""

from cvpress.contexts.generation.exceptions import GenerationError
from cvpress.contexts.generation.writer import ResumeWriter, extract_resume_blocks

__all__ = [
    "GenerationError",
    "ResumeWriter",
    "extract_resume_blocks",
]
