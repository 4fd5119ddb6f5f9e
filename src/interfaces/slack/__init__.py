# src/interfaces/slack/__init__.py
"""Slack front end of the task bot.

Runs over Socket Mode with slack-bolt's AsyncApp and answers `!task` /
`!tasks` messages in thread.

Entry point: python -m src.interfaces.slack.bot (or the task-relay script)
"""
