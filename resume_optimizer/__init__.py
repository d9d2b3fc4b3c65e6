"""
resume-optimizer: compare a résumé against a job description with an LLM,
collect feedback, regenerate an improved résumé and export it.
"""

__version__ = "0.1.0"
