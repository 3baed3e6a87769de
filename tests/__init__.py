"""SUBRELAY test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Behaviour every SubscriptionStore backend must share.
- integration/  : Real databases and migrations (SQLite files, Postgres via Testcontainers).
- functional/   : The CLI driven through ``click.testing.CliRunner``, one command at a time.
- e2e/          : Whole operator journeys through the CLI.
- fixtures/     : Shared pytest fixtures (no tests here).

General guidance
- Keep unit fast and deterministic; prefer the in-memory adapters over mocks.
- Contract tests parametrize backends; Postgres variants skip without Docker.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
