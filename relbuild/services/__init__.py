"""Release build services.

Services implement the orchestration logic: target filtering, signing key
loading, building, and manifest writing. They report failures as ``Result``
values and never import the CLI layer.
"""

from relbuild.services.build import BuildContext, BuildResult, Deadline, new_build
from relbuild.services.errors import (
    BuildError,
    DistError,
    FilterError,
    ManifestIOError,
    SigningKeyError,
)
from relbuild.services.manifest import write_manifest
from relbuild.services.signing import Signer, Signers, load_signing_key
from relbuild.services.targets import Target, TargetFactory, filter_targets

__all__ = [
    # build
    "BuildContext",
    "BuildResult",
    "Deadline",
    "new_build",
    # errors
    "BuildError",
    "DistError",
    "FilterError",
    "ManifestIOError",
    "SigningKeyError",
    # manifest
    "write_manifest",
    # signing
    "Signer",
    "Signers",
    "load_signing_key",
    # targets
    "Target",
    "TargetFactory",
    "filter_targets",
]
