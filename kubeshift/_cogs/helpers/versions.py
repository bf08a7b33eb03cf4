"""
Detecting the library's own version.

The codebase does not contain the version directly; it is taken from
the installed distribution's metadata once at startup when the code is loaded.
It is used only to self-identify in the ``User-Agent`` header.
"""
import importlib.metadata

version: str | None = None

try:
    name, *_ = __name__.split('.')  # usually "kubeshift", unless renamed/forked.
    version = importlib.metadata.version(name)
except importlib.metadata.PackageNotFoundError:
    pass  # not installed, e.g. run from a source checkout.
