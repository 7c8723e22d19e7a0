from .step_00_check_preconditions import CheckPreconditionsStep
from .step_10_remove_legacy import RemoveLegacyPackagesStep
from .step_20_install_prerequisites import InstallRepoPrerequisitesStep
from .step_30_provision_repository import ProvisionRepositoryStep
from .step_40_install_engine import InstallEngineStep
from .step_50_verify import VerifyInstallationStep
from .step_60_cleanup import CleanupVerificationStep
from .step_70_report import ReportStep

__all__ = [
    "CheckPreconditionsStep",
    "RemoveLegacyPackagesStep",
    "InstallRepoPrerequisitesStep",
    "ProvisionRepositoryStep",
    "InstallEngineStep",
    "VerifyInstallationStep",
    "CleanupVerificationStep",
    "ReportStep",
]
