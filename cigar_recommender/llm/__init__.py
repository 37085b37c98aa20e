"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Send the system/user prompt pair to the chat completion endpoint.
- Hand back the parsed JSON object, or raise when the upstream call fails.
"""
