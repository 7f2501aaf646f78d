"""
部署流程。
"""

from hyperlane_cli.deploy.core import run_core_deploy
from hyperlane_cli.deploy.dry_run import evaluate_if_dry_run_failure

__all__ = ["evaluate_if_dry_run_failure", "run_core_deploy"]
