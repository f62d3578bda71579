"""
sysprobe.probe.factory

Select the prober implementation for the interpreter's target platform.

The mapping is the only place that looks at the platform; the probers
themselves never branch on an OS string.
"""

from typing import Optional

from sysprobe.access.system import SystemAccess
from sysprobe.exceptions.exceptions import ExternalToolUnavailableError
from sysprobe.probe.base import Prober
from sysprobe.probe.darwin import MacProber
from sysprobe.probe.linux import LinuxProber
from sysprobe.probe.types import OsName
from sysprobe.probe.windows import WindowsProber
from sysprobe.utilities.os.platform import PlatformInfo, get_platform_info

PROBERS: dict[OsName, type[Prober]] = {
    OsName.LINUX: LinuxProber,
    OsName.WINDOWS: WindowsProber,
    OsName.MAC: MacProber,
}


def get_prober(
    access: Optional[SystemAccess] = None,
    platform_info: Optional[PlatformInfo] = None,
    logger=None,
) -> Prober:
    """
    Build the prober for the running platform.

    Args:
        access (Optional[SystemAccess]): Host capabilities to inject; real ones by default.
        platform_info (Optional[PlatformInfo]): Target platform; the running
            interpreter's by default.
        logger: Optional SysProbeLogger shared with the prober.

    Returns:
        Prober: LinuxProber, WindowsProber or MacProber.

    Raises:
        ExternalToolUnavailableError: If no prober supports the platform.
    """
    platform_info = platform_info or get_platform_info()
    prober_class = PROBERS.get(platform_info.os_name)
    if prober_class is None:
        raise ExternalToolUnavailableError(
            message=f"No prober available for platform '{platform_info.system}'",
            step="get_prober",
            context={"supported": [str(name) for name in PROBERS]},
        )
    return prober_class(access=access, logger=logger)
