"""Django management command to seed users, roles and role mappings.

The command supports:
- Reading the seed configuration from a JSON file. Default is the ROLE_SEEDER_CONFIG setting.
- Forcing the overwrite mode, replacing existing rows with the configured content.
"""

import os

import click
from attrs import evolve
from django.core.management.base import BaseCommand, CommandError

from role_seeder.api.data import SeedConfig
from role_seeder.api.seeding import seed_models_sync
from role_seeder.constants import SEED_CONFIG_SETTING


class Command(BaseCommand):
    """Django management command to seed users, roles and role mappings.

    This command creates (or, in overwrite mode, updates) the configured roles and
    users and then grants the configured roles to the users.

    Example Usage:
        python manage.py seed_roles
        python manage.py seed_roles --config-file /path/to/seed.json
        python manage.py seed_roles --config-file /path/to/seed.json --overwrite
    """

    help = "Seed users, roles and role mappings from a JSON file or the ROLE_SEEDER_CONFIG setting."

    def add_arguments(self, parser) -> None:
        """Add command-line arguments to the argument parser.

        Args:
            parser: The Django argument parser instance to configure.
        """
        parser.add_argument(
            "--config-file",
            type=str,
            default=None,
            help=f"Path to a JSON seed configuration (defaults to the {SEED_CONFIG_SETTING} setting)",
        )
        parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Flag to overwrite existing users and roles with the configured content",
        )

    def handle(self, *args, **options):
        """Execute the seeding command.

        Args:
            *args: Positional command arguments (unused).
            **options: Command options including 'config_file' and 'overwrite'.

        Raises:
            CommandError: If the configuration is missing or invalid.
        """
        config = self.load_config(options["config_file"])
        if options["overwrite"]:
            config = evolve(config, overwrite=True)

        mode = "overwrite" if config.overwrite else "find-or-create"
        self.stdout.write(click.style(f"Seeding in {mode} mode...", fg="blue", bold=True))

        mappings = seed_models_sync(config)
        self._display_summary(config, mappings)

    def load_config(self, config_file):
        """Load the seed configuration from a file or from the settings.

        Args:
            config_file: Path to a JSON configuration file, or None to use the settings.

        Returns:
            SeedConfig: The loaded configuration.

        Raises:
            CommandError: If the file does not exist, cannot be parsed, or no configuration is set.
        """
        if config_file is None:
            try:
                config = SeedConfig.from_settings()
            except ValueError as e:
                raise CommandError(f"Invalid {SEED_CONFIG_SETTING} setting: {e}") from e
            if config is None:
                raise CommandError(f"No seed configuration: pass --config-file or set {SEED_CONFIG_SETTING}")
            return config

        if not os.path.isfile(config_file):
            raise CommandError(f"Config file not found: {config_file}")
        try:
            return SeedConfig.from_file(config_file)
        except ValueError as e:
            raise CommandError(f"Invalid config file {config_file}: {e}") from e

    def _display_summary(self, config, mappings):
        """Display how many rows were seeded.

        Args:
            config: The configuration that was seeded.
            mappings: The result of the role mapping stage.
        """
        created = [mapping for mapping in mappings if mapping is not None]
        skipped = [pair for pair, mapping in zip(config.mappings, mappings) if mapping is None]

        self.stdout.write(click.style(f"✓ Seeded {len(config.roles)} roles", fg="green"))
        self.stdout.write(click.style(f"✓ Seeded {len(config.users)} users", fg="green"))
        self.stdout.write(click.style(f"✓ Created {len(created)} role mappings", fg="green"))

        if mappings:
            for pair in skipped:
                self.stdout.write(click.style(f"✗ Skipped role mapping: {pair.user} -> {pair.role}", fg="yellow"))
        elif config.mappings:
            self.stdout.write(
                click.style(f"✗ Skipped {len(config.mappings)} role mappings: no users or roles seeded", fg="yellow")
            )
