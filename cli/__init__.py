"""
InvDB Command Line
==================
Terminal rendering for the one-shot commands in main.py.
"""
