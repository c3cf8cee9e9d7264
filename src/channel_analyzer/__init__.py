"""YouTube Channel Analyzer.

This package resolves a YouTube channel URL, gathers the channel's most recent
videos, asks an LLM a fixed set of questions about them, and splits the reply
into labeled answers.
"""
