#!/usr/bin/env python3
"""
skill-activation - classify prompts into skill activations.

Subcommands:
    skill-activation hook        - Run as a Claude Code UserPromptSubmit hook
    skill-activation check TEXT  - Show which skills a prompt would activate
    skill-activation validate    - Check that the rule file loads
    skill-activation list        - List rules in rank order
"""

import json
import sys

import click
from rich.console import Console
from rich.table import Table

from skill_activation import config, hook
from skill_activation.errors import ConfigError
from skill_activation.matcher import matched_files, matched_phrases
from skill_activation.ranker import find_matches, rank_matches
from skill_activation.rules import load_rules, sorted_rules

console = Console()
err_console = Console(stderr=True)

rules_option = click.option(
    "--rules", "-r", "rules_path", type=click.Path(dir_okay=False),
    help=f"Rule file (default: ${config.RULES_ENV_VAR} or "
         f"<project>/{config.RULES_RELATIVE_PATH})",
)


def _load_or_exit(rules_path):
    path = config.resolve_rules_path(rules_path)
    try:
        return load_rules(path)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="skill-activation")
def main():
    """
    Decide which skills are relevant to a prompt.

    Rules are read from skill-rules.json on every call. For help on any
    subcommand, use:

    \b
        skill-activation COMMAND --help
    """


@main.command("hook")
@rules_option
def hook_cmd(rules_path):
    """Read a hook payload on stdin and print activations as JSON."""
    sys.exit(hook.run(sys.stdin, sys.stdout, sys.stderr, rules_path))


@main.command()
@click.argument("prompt")
@click.option("--file", "-f", "files", multiple=True,
              help="File path in play (repeatable)")
@rules_option
@click.option("--json", "as_json", is_flag=True,
              help="Print the hook output document instead of a table")
def check(prompt, files, rules_path, as_json):
    """Show which skills PROMPT would activate, and why."""
    table = _load_or_exit(rules_path)
    invocation = hook.Invocation(prompt=prompt, files=list(files))

    if as_json:
        result = hook.classify(table, invocation)
        click.echo(json.dumps(result.to_dict() if result else {}, indent=2))
        return

    paths = invocation.candidate_paths
    matches = rank_matches(
        find_matches(table, prompt, paths), len(table.rules)
    )
    if not matches:
        console.print("[yellow]No skills match[/yellow]")
        return

    limit = table.settings.max_skills_per_prompt
    out = Table(title=f"Matches (max {limit} per prompt)")
    out.add_column("#", justify="right")
    out.add_column("Skill", style="cyan")
    out.add_column("Priority", justify="right")
    out.add_column("Enforcement")
    out.add_column("Matched on")

    for i, match in enumerate(matches):
        rule = table.get(match.name)
        reasons = [f'"{p}"' for p in matched_phrases(prompt, rule.triggers.prompt)]
        reasons += [f"{pat} ({path})" for pat, path in matched_files(paths, rule.triggers.files)]
        selected = i < limit
        out.add_row(
            str(i + 1) if selected else "-",
            match.name if selected else f"[dim]{match.name}[/dim]",
            str(match.priority),
            match.enforcement,
            ", ".join(reasons),
        )
    console.print(out)
    if len(matches) > limit:
        console.print(f"[dim]{len(matches) - max(limit, 0)} match(es) dropped by maxSkillsPerPrompt[/dim]")


@main.command()
@rules_option
def validate(rules_path):
    """Load the rule file and report problems."""
    table = _load_or_exit(rules_path)
    no_triggers = [r.name for r in table.rules.values() if r.triggers.is_empty()]
    console.print(f"[green]OK[/green] {table.source}: {len(table.rules)} skill(s)")
    for name in no_triggers:
        console.print(f"[yellow]Warning:[/yellow] skill '{name}' has no triggers and never activates")


@main.command("list")
@rules_option
def list_cmd(rules_path):
    """List every rule in rank order."""
    table = _load_or_exit(rules_path)
    out = Table(title=str(table.source))
    out.add_column("Skill", style="cyan")
    out.add_column("Priority", justify="right")
    out.add_column("Enforcement")
    out.add_column("Prompt triggers")
    out.add_column("File triggers")
    out.add_column("Description")
    for rule in sorted_rules(table):
        out.add_row(
            rule.name,
            str(rule.priority),
            rule.enforcement,
            ", ".join(rule.triggers.prompt),
            ", ".join(rule.triggers.files),
            rule.description,
        )
    console.print(out)


if __name__ == "__main__":
    main()
