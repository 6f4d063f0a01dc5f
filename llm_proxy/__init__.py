# llm_proxy package
# Thin FastAPI proxy in front of an OpenAI-compatible chat-completions API.

__version__ = "0.3.0"
