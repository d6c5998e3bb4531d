import datetime

from rgwfs import RGWFileSystem
from rgwfs.client.memory import MemoryObjectClient


class TickingClock:
    """Clock that moves forward one second every time it is read."""

    def __init__(self, start: datetime.datetime = None):
        self.now = start or datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)

    def __call__(self):
        self.now += datetime.timedelta(seconds=1)
        return self.now


def build_filesystem(client: MemoryObjectClient = None, **kwargs):
    if client is None:
        client = MemoryObjectClient(containers=["bucket"], clock=TickingClock())
    fs = RGWFileSystem("ceph://bucket/", client=client, owner="tester", **kwargs)
    return fs, client


def put(client: MemoryObjectClient, key: str, data: bytes = b"x", container: str = "bucket"):
    client.upload_object(container, key, data)
