"""Sinks – where events end up: the local structured log and the remote store."""
from mp_eventstore.sinks.local import LocalSink
from mp_eventstore.sinks.remote import RemoteSink, UninitializedRemoteSink

__all__ = ["LocalSink", "RemoteSink", "UninitializedRemoteSink"]
