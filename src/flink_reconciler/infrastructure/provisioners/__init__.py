"""Manager provisioner implementations."""

from flink_reconciler.infrastructure.provisioners.noop_provisioners import (
    NoopJobManagerProvisioner,
    NoopTaskManagerProvisioner,
)

__all__ = ["NoopJobManagerProvisioner", "NoopTaskManagerProvisioner"]
