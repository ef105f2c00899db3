# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core


class AliasedTyperGroup(typer.core.TyperGroup):
    """TyperGroup whose command names are comma-separated alias lists, e.g. "list, l" """

    _ALIAS_SEPARATOR = re.compile(r" ?, ?")

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self._resolve_alias(cmd_name))

    def _resolve_alias(self, alias: str) -> str:
        for name in self.commands:
            if alias in self._ALIAS_SEPARATOR.split(name):
                return name
        return alias


class OrderedAliasedTyperGroup(AliasedTyperGroup):
    """Lists the top-level commands in a fixed order instead of registration order"""

    def list_commands(self, ctx: click.Context) -> list[str]:
        desired_order = [
            "record, r",
            "entry, e",
            "task, t",
            "stats, s",
            "achievements, ac",
            "summary, su",
            "access, a",
            "config, c",
        ]

        result = [name for name in desired_order if name in self.commands]
        for cmd_name in self.commands.keys():
            if cmd_name not in result:
                result.append(cmd_name)
        return result
