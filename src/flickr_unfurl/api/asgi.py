"""ASGI entrypoint for the Flickr unfurl service."""

from flickr_unfurl.api.app import create_app
from flickr_unfurl.containers import build_container

app = create_app(build_container())
