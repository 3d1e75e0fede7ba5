"""Test environment: a GitHub token, no webhook secret, no LLM."""

import os

os.environ["GITHUB_TOKEN"] = "test-token"
os.environ["GITHUB_WEBHOOK_SECRET"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["OPENROUTER_API_KEY"] = ""
