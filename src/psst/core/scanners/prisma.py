"""Detect Prisma and summarize the schema's database and modeling choices."""
from __future__ import annotations

import re
from pathlib import Path
from typing import List

from psst.core.rules import Category, Rule, ScanResult
from psst.core.scanners.base import BaseScanner

SCHEMA_FILES = ("schema.prisma", "prisma/schema.prisma")

PROVIDER_RULES = {
    "postgresql": "Using PostgreSQL database. Use UUID for primary keys and leverage PostgreSQL-specific "
    "features like arrays and JSON types.",
    "mysql": "Using MySQL database. Be mindful of MySQL-specific limitations and use appropriate data types.",
    "sqlite": "Using SQLite database. Ideal for development and testing. "
    "Consider migrating to PostgreSQL for production.",
    "sqlserver": "Using SQL Server database. Leverage SQL Server-specific features and ensure proper "
    "connection pooling.",
    "mongodb": "Using MongoDB database. Use embedded documents for one-to-many relationships and leverage "
    "MongoDB-specific features.",
}

# (marker, rule) pairs checked against the raw schema text, in order.
MODELING_RULES = (
    (
        ("@relation",),
        "Using Prisma relations. Use descriptive relation names and consider the impact on queries and performance.",
    ),
    (
        ("enum ",),
        "Using Prisma enums. Keep enum values consistent and consider migration impact when adding new values.",
    ),
    (
        ("@@index", "@@unique"),
        "Using database indexes. Monitor query performance and ensure indexes align with your application's "
        "query patterns.",
    ),
    (
        ("@default(",),
        "Using default values in schema. Ensure defaults are appropriate for your business logic and consider "
        "using database functions.",
    ),
    (
        ("@@id(",),
        "Using composite primary keys. Ensure the combination uniquely identifies records and consider query "
        "implications.",
    ),
)

_PROVIDER = re.compile(r'provider\s*=\s*"([\w-]+)"')
_GENERATOR = re.compile(r"generator\s+\w+")
_OUTPUT = re.compile(r"^\s*output\s*=", re.MULTILINE)


class PrismaScanner(BaseScanner):
    name = "prisma"
    category = Category.PRISMA

    async def scan(self, root_path: Path) -> ScanResult:
        self.logger.debug("Scanning for Prisma configuration")

        schema_file = await self.first_existing(root_path, SCHEMA_FILES)
        manifest = await self.load_manifest(root_path)
        has_dependency = manifest.has_any_dependency(
            ("prisma", "@prisma/client"), ("dependencies", "devDependencies")
        )
        if not schema_file and not has_dependency:
            return []

        rules: List[Rule] = []
        if has_dependency:
            rules.append(
                self.rule(
                    "Use Prisma Client for type-safe database queries. "
                    "Generate client after schema changes with `prisma generate`."
                )
            )
        if schema_file:
            schema = await self.read_text(Path(root_path) / schema_file)
            if schema:
                rules.extend(self._provider_rules(schema))
                rules.extend(self._feature_rules(schema))
                rules.extend(
                    self.rule(text) for markers, text in MODELING_RULES if any(m in schema for m in markers)
                )
                rules.extend(await self._project_layout_rules(root_path))
        return rules

    def _provider_rules(self, schema: str) -> List[Rule]:
        # The generator block also declares a provider; take the first database one.
        for provider in _PROVIDER.findall(schema):
            if provider in PROVIDER_RULES:
                return [self.rule(PROVIDER_RULES[provider])]
        return []

    def _feature_rules(self, schema: str) -> List[Rule]:
        rules: List[Rule] = []
        if "previewFeatures" in schema:
            rules.append(
                self.rule(
                    "Using Prisma preview features. "
                    "Be aware that these are experimental and may change in future versions."
                )
            )
        if len(_GENERATOR.findall(schema)) > 1:
            rules.append(
                self.rule(
                    "Using multiple generators. "
                    "Ensure each generator serves a specific purpose and maintain consistent configuration."
                )
            )
        if _OUTPUT.search(schema):
            rules.append(
                self.rule(
                    "Using custom output path for generated client. "
                    "Ensure the path is included in version control and build processes."
                )
            )
        if "binaryTargets" in schema:
            rules.append(
                self.rule(
                    "Using custom binary targets. "
                    "Ensure all deployment platforms are covered and binaries are compatible."
                )
            )
        return rules

    async def _project_layout_rules(self, root_path: Path) -> List[Rule]:
        rules: List[Rule] = []
        if await self.exists(root_path, "prisma", "migrations"):
            rules.append(
                self.rule(
                    "Using Prisma migrations. Always review migration files before applying and use "
                    "descriptive names. Run `prisma migrate dev` for development."
                )
            )
        if await self.first_existing(Path(root_path) / "prisma", ("seed.ts", "seed.js")):
            rules.append(
                self.rule(
                    "Using Prisma seed file. Keep seed data minimal and representative of real-world "
                    "scenarios for consistent development."
                )
            )
        return rules
