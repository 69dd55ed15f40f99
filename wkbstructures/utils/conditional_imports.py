"""
Intercepts imports of optional dependencies (e.g. shapely) that aren't installed,
and either installs the matching extra or explains how to.
"""

__all__ = ['ConditionalPackageInterceptor']

from importlib import util
import subprocess
import sys
from typing import Union

from wkbstructures.utils.mixins import LoggingMixin


class ConditionalPackageInterceptor(LoggingMixin):
    """
    A meta path finder, consulted last, that handles optional packages which
    aren't installed.

    Only packages registered through .permit_packages() are handled; any other
    missing import falls through to the usual ModuleNotFoundError. Registered
    packages are pip installed if auto download has been enabled, otherwise a
    ModuleNotFoundError naming the extra to install is raised.

    To use, register the packages and append the class to sys.meta_path from the
    package's root __init__.py:

        ConditionalPackageInterceptor.permit_packages({'shapely': 'wkbstructures[shapely]'})
        sys.meta_path.append(ConditionalPackageInterceptor)
    """

    PERMITTED_PACKAGES: dict = {}
    AUTO_DOWNLOAD = False

    @classmethod
    def permit_packages(cls, packages: Union[list, dict]) -> None:
        """
        Registers packages that may be handled by this interceptor.

        Args:
            packages:
                Either a list of names, where the import name is also the pip
                requirement, or a dict mapping import names to pip requirements
                (e.g. {'shapely': 'wkbstructures[shapely]'})

        Returns:
            None
        """
        if isinstance(packages, list):
            cls.PERMITTED_PACKAGES.update({item: item for item in packages})
        elif isinstance(packages, dict):
            cls.PERMITTED_PACKAGES.update(packages)
        else:
            raise TypeError(
                f"Permitted packages must be submitted as a list or dict, not {type(packages)}"
            )

    @classmethod
    def permit_auto_download(cls, option: bool) -> None:
        """
        Defines whether packages may be auto-downloaded or not. Default False.
        """
        cls.AUTO_DOWNLOAD = option

    @classmethod
    def find_spec(  # pylint: disable=unused-argument, inconsistent-return-statements
            cls, name, path, target=None
    ):
        """
        Called by importlib once every other finder on sys.meta_path has failed
        to locate the module.

        Args:
            name (str): The name of the module being imported
            path:
            target:

        Returns:
            The module spec, if the package was installed; otherwise None
        """
        if name not in cls.PERMITTED_PACKAGES:
            return

        if cls.AUTO_DOWNLOAD:
            print(f"Module {name!r} not installed. Attempting to pip install...")
            try:
                subprocess.run(
                    [sys.executable, '-m', 'pip', 'install', cls.PERMITTED_PACKAGES[name]],
                    check=True
                )
            except subprocess.CalledProcessError:
                return None

            return util.find_spec(name)

        raise ModuleNotFoundError(
            f"You are attempting to use a feature which requires an optional installation "
            f"({name}). Please choose one of the following options to continue: \n\n "
            "1) Enable package auto-installation using: \n"
            "    from wkbstructures.utils.conditional_imports import "
            "ConditionalPackageInterceptor \n"
            "    ConditionalPackageInterceptor.permit_auto_download(True) \n\n"
            "2) Pip install the package yourself using the following command: \n"
            f"    pip install {cls.PERMITTED_PACKAGES[name]}"
        )
