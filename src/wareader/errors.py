"""Errors raised while loading or parsing a chat export."""


class ChatParseError(Exception):
    """Base class for errors that abort a parse."""


class EmptyInputError(ChatParseError):
    """The transcript is empty or whitespace only."""

    def __init__(self, message: str = "The chat text file is empty."):
        super().__init__(message)


class NoMessagesRecognizedError(ChatParseError):
    """The transcript has text but no line matched the header grammar."""

    def __init__(
        self,
        message: str = (
            "Could not find any valid WhatsApp messages. "
            'Make sure this is a WhatsApp "Export Chat" file.'
        ),
    ):
        super().__init__(message)


class UnsupportedFileError(ChatParseError):
    """The export is neither a .txt transcript nor a .zip archive."""


class MissingTranscriptError(ChatParseError):
    """A .zip archive without a .txt transcript inside."""
