class FetchFailed(Exception):
    """
    The single supply error: no quiz could be delivered.
    Covers empty source data, malformed upstream payloads,
    upstream service errors and network failures alike.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
