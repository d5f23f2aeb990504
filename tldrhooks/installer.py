"""
Hook and skill installer

Copies the tldr skill and registers the tldrhooks commands in the host's
settings.json, either globally (~/.claude) or for one project
(<project>/.claude).
This module is lazy-loaded only when the install command is used.
"""

import json
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel

ASSETS_DIR = Path(__file__).parent / "assets"
SKILL_SRC = ASSETS_DIR / "skill"
SETTINGS_SRC = ASSETS_DIR / "settings.json"

console = Console()


class InstallError(Exception):
    """Raised when the install target or bundled assets are unusable."""


@dataclass
class InstallReport:
    target_dir: Path
    skill_path: Optional[Path] = None
    settings_status: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


def resolve_target(global_install: bool, project: Optional[str]) -> Path:
    """
    Pick the .claude directory to install into.

    Raises:
        InstallError: If neither or both targets are given, or the project
            directory does not exist
    """
    if global_install and project:
        raise InstallError("Choose either --global or --project, not both.")
    if global_install:
        return Path.home() / ".claude"
    if not project:
        raise InstallError("Specify --global or --project <path>.")

    project_path = Path(project).expanduser()
    if not project_path.is_dir():
        raise InstallError(f"Directory does not exist: {project}")
    return project_path.resolve() / ".claude"


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two JSON objects.

    Nested objects are merged key by key; for any other value the one
    from `override` wins. Neither input is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_settings(target_settings: Path, source_settings: Path = SETTINGS_SRC) -> str:
    """
    Merge the bundled hook settings into a settings.json.

    Returns:
        "created" if the target did not exist, "merged" if it was updated,
        "saved-aside" if the target is not valid JSON and the bundled
        settings were written next to it as settings.json.tldr
    """
    source = json.loads(source_settings.read_text())

    if not target_settings.exists():
        target_settings.write_text(json.dumps(source, indent=2) + "\n")
        return "created"

    try:
        existing = json.loads(target_settings.read_text())
    except json.JSONDecodeError:
        existing = None

    if not isinstance(existing, dict):
        aside = target_settings.with_name(target_settings.name + ".tldr")
        shutil.copyfile(source_settings, aside)
        return "saved-aside"

    merged = deep_merge(existing, source)
    target_settings.write_text(json.dumps(merged, indent=2) + "\n")
    return "merged"


def install_skill(target_dir: Path) -> Path:
    """Copy the bundled skill to <target>/plugins/tldr, replacing any old copy."""
    destination = target_dir / "plugins" / "tldr"
    if destination.exists():
        shutil.rmtree(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(SKILL_SRC, destination)
    return destination


def install(target_dir: Path, skill: bool = True, hooks: bool = True) -> InstallReport:
    """
    Install the skill and/or hook settings into a .claude directory.

    Raises:
        InstallError: If nothing is selected or bundled assets are missing
    """
    if not skill and not hooks:
        raise InstallError("Nothing to install: --skill-only and --hooks-only are exclusive.")
    if not SKILL_SRC.is_dir() or not SETTINGS_SRC.is_file():
        raise InstallError(f"Bundled assets not found at {ASSETS_DIR}")

    target_dir.mkdir(parents=True, exist_ok=True)
    report = InstallReport(target_dir=target_dir)

    if skill:
        report.skill_path = install_skill(target_dir)

    if hooks:
        settings_path = target_dir / "settings.json"
        report.settings_status = merge_settings(settings_path)
        if report.settings_status == "saved-aside":
            report.warnings.append(
                f"{settings_path} is not valid JSON. Merge {settings_path}.tldr manually."
            )

    return report


def print_report(report: InstallReport) -> None:
    """Show what was installed and the next steps."""
    console.print(f"[green]Installing to {report.target_dir}[/green]")
    if report.skill_path:
        console.print(f"[green]  ✓ Skill installed to {report.skill_path}[/green]")
    if report.settings_status in ("created", "merged"):
        console.print(f"[green]  ✓ Hooks registered in settings.json ({report.settings_status})[/green]")
    for warning in report.warnings:
        console.print(f"[yellow]  Warning: {warning}[/yellow]")

    console.print(
        Panel(
            "Next steps:\n"
            "  1. Ensure the tldr CLI is installed: pip install llm-tldr\n"
            "  2. Restart the host to load the plugin\n"
            "  3. Run 'tldrhooks warm' in your project to build indexes\n\n"
            "Available commands:\n"
            "  tldrhooks context <func>   Get function context\n"
            "  tldrhooks semantic <q>     Semantic search\n"
            "  tldrhooks impact <func>    Impact analysis",
            title="Installation complete",
            border_style="green",
        )
    )
