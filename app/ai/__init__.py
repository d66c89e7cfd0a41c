"""
AI Module - The consensus engine.

Architecture Overview:
=====================

┌─────────────────────────────────────────────────────────────────────────┐
│                         Response Aggregator                              │
│           fan-out, deadline, first-failure-aborts                        │
└───────────────────────────────┬─────────────────────────────────────────┘
                                │
        ┌───────────────────────┼───────────────────────┐
        │                       │                       │
        ▼                       ▼                       ▼
┌───────────────┐     ┌───────────────┐     ┌───────────────┐
│    OpenAI     │     │    Gemini     │     │    Cohere     │
│  (template)   │     │  (streamed)   │     │    (REST)     │
└───────┬───────┘     └───────┬───────┘     └───────┬───────┘
        └───────────────────────┼───────────────────────┘
                                ▼
                ┌───────────────────────────────┐
                │ Selector (cosine similarity)  │
                └───────────────────────────────┘

Module Structure:
================
- providers/: AI provider clients (OpenAI, Gemini, Cohere)
- consensus/: similarity, selector and aggregator
- prompts/: Prompt templates
- monitoring/: Logging, metrics, and usage tracking
- errors: exception taxonomy
"""

# Version of the AI module
__version__ = "0.1.0"
