"""
cvpress - typesetting for model-written resumes

Turns free-form resume text (typically produced by a language model) into a
paginated PDF: the text is parsed into a structured resume model, then laid out
top-down onto fixed-size pages with font metrics, word wrapping and page breaks.

Architecture:
- Generation Context: Model call, prompt construction, markup stripping
- Parsing Context: Heuristic line classification into a structured resume model
- Rendering Context: Line wrapping, page layout, pagination and PDF serialization
"""

__version__ = "0.1.0"
