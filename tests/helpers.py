import io

from api_client import Response

TEST_URI = "http://example.com"
EXPECTED_ACTION = '{"action":"deckNamesAndIds","version":6}'
RESPONSE_JSON = '{"result":{"Default":1},"error":null}'


class TrackingStream(io.BytesIO):
    def __init__(self, data=b""):
        super().__init__(data)
        self.close_calls = 0

    def close(self):
        self.close_calls += 1
        super().close()


class FailingCloseStream(TrackingStream):
    def close(self):
        self.close_calls += 1
        raise OSError("close failed")


def make_response(status_code=200, text=RESPONSE_JSON):
    stream = TrackingStream(text.encode("utf-8")) if text is not None else None
    return Response(status_code, stream)
