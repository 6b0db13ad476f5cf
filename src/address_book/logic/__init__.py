"""
Command logic.

Components:
- commands.py: Command base class, CommandResult and every text command
- parser.py: prefix tokenizer, per-command parsers and the CommandRegistry
"""
