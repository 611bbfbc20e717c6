import codecs


class StreamDecoder:
    """
    Incremental UTF-8 decoder for one relayed stream.

    A multi-byte character split across two upstream chunks is held back
    until the rest of it arrives, so relaying each decoded piece gives the
    same text as decoding the whole body at once.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def decode(self, chunk: bytes) -> str:
        return self._decoder.decode(chunk)

    def flush(self) -> str:
        """Returns whatever is left once the upstream stream has ended."""
        return self._decoder.decode(b"", final=True)
