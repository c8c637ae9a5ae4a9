"""Test suite for the chat session controller.

Unit tests live under unit/ grouped by component; shared fakes for the
transport, the event loop timer and the host frame are in helpers/.
"""
