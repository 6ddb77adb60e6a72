"""Tests for the click command line interface"""

import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from apps.shopware.utils.errors import AuthenticationError
from cli import cli


CLI = "apps.shopware.shopware_cli"


class TestShopwareCli:

    def test_commands_are_registered(self):
        result = CliRunner().invoke(cli, ["shopware", "--help"])

        assert result.exit_code == 0
        for command in ("generate", "seed", "serve", "clear-cache"):
            assert command in result.output

    def test_generate_writes_json(self, tmp_path, make_product):
        output = tmp_path / "products.json"

        with (
            patch(f"{CLI}.validate_openai_config"),
            patch(f"{CLI}.generate_products", new_callable=AsyncMock, return_value=[make_product("Fizz Cola")]) as generate,
        ):
            result = CliRunner().invoke(
                cli,
                ["shopware", "generate", "-c", "soft drinks", "-n", "1", "--no-images", "--output", str(output)],
            )

        assert result.exit_code == 0, result.output
        assert generate.call_args.args == ("soft drinks", 1)
        assert generate.call_args.kwargs["want_images"] is False
        assert json.loads(output.read_text(encoding="utf-8"))[0]["name"] == "Fizz Cola"

    def test_generate_without_products_fails(self, tmp_path):
        with (
            patch(f"{CLI}.validate_openai_config"),
            patch(f"{CLI}.generate_products", new_callable=AsyncMock, return_value=[]),
        ):
            result = CliRunner().invoke(cli, ["shopware", "generate", "--output", str(tmp_path / "p.json")])

        assert result.exit_code == 1
        assert not (tmp_path / "p.json").exists()

    def test_seed_reports_failure(self):
        with patch(f"{CLI}.seed_catalog", new_callable=AsyncMock, side_effect=AuthenticationError("bad credentials", 401)):
            result = CliRunner().invoke(cli, ["shopware", "seed", "-n", "2"])

        assert result.exit_code == 1

    def test_seed_passes_options(self):
        summary = {"category": "furniture", "requested": 2, "products": 2, "property_groups": 0, "images": 0}

        with patch(f"{CLI}.seed_catalog", new_callable=AsyncMock, return_value=summary) as seed:
            result = CliRunner().invoke(cli, ["shopware", "seed", "-c", "furniture", "-n", "2", "--no-properties", "--no-images"])

        assert result.exit_code == 0, result.output
        assert seed.call_args.args == ("furniture", 2)
        assert seed.call_args.kwargs["with_properties"] is False
        assert seed.call_args.kwargs["with_images"] is False

    def test_clear_cache(self):
        with patch(f"{CLI}.clear_image_cache") as clear:
            result = CliRunner().invoke(cli, ["shopware", "clear-cache", "-c", "soft drinks"])

        assert result.exit_code == 0
        clear.assert_called_once_with("soft drinks")

    def test_settings_logged_without_secrets(self):
        with patch(f"{CLI}.clear_image_cache"), patch(f"{CLI}.logger") as logger:
            result = CliRunner().invoke(cli, ["shopware", "clear-cache"])

        assert result.exit_code == 0
        logged = " ".join(str(call.args[0]) for call in logger.debug.call_args_list)
        assert "SW_ENV_URL" in logged
        assert "OPENAI_API_KEY" not in logged
