"""
Clean command handler.
"""

from blueprint.commands.base import console, load_driver


def clean_command(config_path: str) -> bool:
    """
    Remove the build directory and every artifact in it.

    Returns:
        True if something was removed.
    """
    driver = load_driver(config_path)
    removed = driver.clean()
    if removed:
        console.success("Removed build directory", str(driver.layout.build_dir))
    else:
        console.process_item("Build directory already clean")
    return removed
