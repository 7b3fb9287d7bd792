"""Tests for the site build job."""

import json
from pathlib import Path

import httpx
import pytest
import respx

from manabase.config import Settings
from manabase.jobs.build_site import BULK_DATA_FILENAME, main, parse_args, run_build
from manabase.models.failure import TagConfigError

REPO_CONFIG_DIR = Path(__file__).parent.parent / "config"
SAMPLE_BULK_PATH = Path(__file__).parent / "fixtures" / "oracle_cards_sample.json"

BULK_API = "https://api.example.test/bulk-data"
DOWNLOAD_URL = "https://data.example.test/oracle-cards.json"


@pytest.fixture
def config(tmp_path: Path) -> Settings:
    return Settings(
        config_dir=REPO_CONFIG_DIR,
        data_path=SAMPLE_BULK_PATH,
        output_dir=tmp_path / "www",
    )


class TestRunBuild:
    def test_full_build(self, config: Settings) -> None:
        result = run_build(config)

        assert result.tag_count == 35
        assert result.card_count == 6
        # Lightning Bolt is in no category
        assert result.retained_count == 5
        assert result.missing_overrides == ["Dryad Arbor", "Lotus Petal"]
        assert len(result.pages) == 5

    def test_pages_content(self, config: Settings) -> None:
        run_build(config)

        all_cards = json.loads((config.output_dir / "all.json").read_text(encoding="utf-8"))
        elves = next(c for c in all_cards["cards"] if c["name"] == "Llanowar Elves")
        assert elves["tags"] == ["Cost: 1", "Elf", "Mana Dork"]

        ramp = json.loads((config.output_dir / "ramp.json").read_text(encoding="utf-8"))
        ramp_tag = next(t for k in ramp["kinds"] for t in k["tags"] if t["name"] == "Ramp")
        assert [b["subtag"] for b in ramp_tag["buckets"]] == ["Land Search"]

    def test_parallel_build(self, config: Settings) -> None:
        serial = run_build(config)
        parallel = run_build(config.model_copy(update={"workers": 4}))

        assert parallel.retained_count == serial.retained_count

    def test_bad_config_fails_before_cards(self, config: Settings, tmp_path: Path) -> None:
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "lands.toml").write_text('["Broken"]\ntype = "["\n', encoding="utf-8")
        broken = config.model_copy(
            update={"config_dir": config_dir, "data_path": tmp_path / "missing.json"}
        )

        with pytest.raises(TagConfigError):
            run_build(broken)

    @respx.mock
    def test_downloads_when_no_data_path(self, config: Settings) -> None:
        respx.get(BULK_API).mock(
            return_value=httpx.Response(
                200, json={"data": [{"type": "oracle_cards", "download_uri": DOWNLOAD_URL}]}
            )
        )
        respx.get(DOWNLOAD_URL).mock(
            return_value=httpx.Response(200, content=SAMPLE_BULK_PATH.read_bytes())
        )
        download = config.model_copy(update={"data_path": None, "bulk_data_api": BULK_API})

        result = run_build(download)

        assert result.card_count == 6
        assert (config.output_dir.parent / BULK_DATA_FILENAME).exists()


class TestMain:
    def test_parse_args(self) -> None:
        args = parse_args(["out", "-d", "cards.json", "-c", "conf", "-j", "3"])

        assert args.output == Path("out")
        assert args.data == Path("cards.json")
        assert args.config == Path("conf")
        assert args.workers == 3

    def test_success(self, tmp_path: Path) -> None:
        exit_code = main(
            [str(tmp_path / "www"), "-d", str(SAMPLE_BULK_PATH), "-c", str(REPO_CONFIG_DIR)]
        )

        assert exit_code == 0
        assert (tmp_path / "www" / "lands.json").exists()

    def test_config_error_exit_code(self, tmp_path: Path) -> None:
        (tmp_path / "ramp.toml").write_text('["Everything"]\nalt-names = ["All"]\n')

        exit_code = main([str(tmp_path / "www"), "-d", str(SAMPLE_BULK_PATH), "-c", str(tmp_path)])

        assert exit_code == 1
        assert not (tmp_path / "www").exists()

    def test_missing_data_exit_code(self, tmp_path: Path) -> None:
        exit_code = main(
            [str(tmp_path / "www"), "-d", str(tmp_path / "none.json"), "-c", str(REPO_CONFIG_DIR)]
        )
        assert exit_code == 1
