"""Mailbox state API - processed / failed transitions for source emails"""
