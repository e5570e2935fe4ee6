"""Global pytest configuration."""

import os

# Run against the deterministic stub oracle and the in-memory cache
os.environ["OPENAI_API_KEY"] = ""
os.environ["REDIS_URL"] = ""
