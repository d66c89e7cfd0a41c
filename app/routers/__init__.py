"""
Routers module - API endpoint handlers organized by feature.

- prompt: consensus prompt engineering (/engineer-prompt)
"""
