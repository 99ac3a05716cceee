"""Mailbox infrastructure module - IMAP folder transitions."""

from .imap_mailbox import ImapConfig, ImapMailboxMover

__all__ = ["ImapConfig", "ImapMailboxMover"]
