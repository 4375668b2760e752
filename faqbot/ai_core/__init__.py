"""
AI Core Module - question matching and answer composition.

Key responsibilities:
- Question classification against the knowledge base (exact / related / none)
- Validation of classifier output against the cached entries
- Answer composition for each match outcome
"""
