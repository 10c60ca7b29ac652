# DirAnalyzer Lifecycle
# Installs the diranalyzer binary and later finds and removes everything the
# install may have produced.
# Created: 2026-10-18

from importlib.metadata import PackageNotFoundError, version as _meta_version

try:
    __version__ = _meta_version("diranalyzer-installer")
except PackageNotFoundError:
    # Not installed as a distribution (running from a checkout)
    from installer.lifecycle.common import SCRIPT_VERSION as __version__
