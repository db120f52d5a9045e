"""Unit tests for Config tree queries and IP inheritance."""

import pytest

from edgeblock.core.edgeos.parser import parse_text
from edgeblock.core.edgeos.tree import Config
from edgeblock.models.blacklist import Node, SourceObject, SourceType
from edgeblock.models.settings import Settings


@pytest.fixture
def config(sample_config_text):
    return parse_text(sample_config_text)


class TestConfigQueries:
    """nodes(), get(), stats()."""

    def test_nodes_sorted(self, config):
        assert config.nodes() == ["blacklist", "domains", "hosts"]

    def test_get_missing_node(self, config):
        assert config.get("zones") is None

    def test_stats(self, config):
        stats = config.stats(file_loaded="/config/config.boot")
        assert stats.nodes_count == 3
        assert stats.sources_count == 4
        assert stats.includes_count == 3
        assert stats.excludes_count == 4
        assert stats.to_dict()["file_loaded"] == "/config/config.boot"

    def test_len(self, config):
        assert len(config) == 3


class TestIpInheritance:
    """Empty node IPs resolve to the root IP."""

    def test_node_without_ip_inherits_root(self, config):
        assert config.get("domains").ip == ""
        assert config.get_ip("domains") == "0.0.0.0"

    def test_node_ip_overrides_root(self, config):
        assert config.get_ip("hosts") == "192.168.168.1"

    def test_root_resolves_to_itself(self, config):
        assert config.get_ip("blacklist") == "0.0.0.0"

    def test_missing_node_inherits_root(self, config):
        assert config.get_ip("zones") == "0.0.0.0"

    def test_empty_root_ip_gives_empty(self):
        config = parse_text("blacklist {\n    domains {\n    }\n}\n")
        assert config.get_ip("domains") == ""

    def test_no_root_gives_empty(self):
        config = Config()
        config.tree["domains"] = Node(name="domains")
        assert config.get_ip("domains") == ""

    def test_every_empty_node_matches_root(self, config):
        root_ip = config.get_ip("blacklist")
        for name in config.nodes():
            if not config.get(name).ip:
                assert config.get_ip(name) == root_ip


class TestSources:
    """sources() and get_all()."""

    def test_sources_fill_empty_ips(self, config):
        ips = {s.name: s.ip for s in config.sources("hosts")}
        assert ips == {"openphish": "192.168.168.1", "tasty": "10.10.10.10"}

    def test_sources_missing_node(self, config):
        assert config.sources("zones") == []

    def test_sources_returns_copy(self, config):
        sources = config.sources("domains")
        sources.clear()
        assert len(config.get("domains").sources) == 2

    def test_get_all_follows_settings_nodes(self, config):
        names = [s.name for s in config.get_all()]
        assert names == ["malc0de", "yoyo", "openphish", "tasty"]

    def test_get_all_filtered(self, config):
        assert [s.name for s in config.get_all("file")] == ["tasty"]
        assert [s.name for s in config.get_all("url")] == ["malc0de", "yoyo", "openphish"]

    def test_get_all_custom_nodes(self, sample_config_text):
        config = parse_text(sample_config_text, settings=Settings(nodes=["hosts"]))
        assert [s.name for s in config.get_all()] == ["openphish", "tasty"]

    def test_get_all_unrecognized_type(self, config):
        assert config.get_all("ftp") == []
        assert [s.name for s in config.get_all("ftp", "file")] == ["tasty"]

    def test_get_all_respects_settings_ltypes(self, sample_config_text):
        config = parse_text(sample_config_text, settings=Settings(ltypes=["url"]))
        assert config.ltypes() == ["url"]
        assert config.get_all("file") == []
        assert len(config.get_all("url")) == 3


class TestExcludes:
    """exclude_list() and excludes()."""

    def test_exclude_list_per_node(self, config):
        assert config.exclude_list("hosts") == ["cfvod.kaltura.com"]

    def test_exclude_list_all_nodes_union(self, config):
        assert config.exclude_list() == [
            "122.2o7.net",
            "1e100.net",
            "googleadservices.com",
            "cfvod.kaltura.com",
        ]

    def test_exclude_list_drops_duplicates(self):
        config = parse_text(
            "blacklist {\n"
            "    exclude a.com\n"
            "    domains {\n"
            "        exclude a.com\n"
            "        exclude b.com\n"
            "    }\n"
            "}\n"
        )
        assert config.exclude_list() == ["a.com", "b.com"]

    def test_excludes_entry_set_suffix(self):
        config = parse_text(
            "blacklist {\n"
            "    dns-redirect-ip 0.0.0.0\n"
            "    domains {\n"
            "        exclude example.org\n"
            "        source mysrc {\n"
            "            url https://x/list\n"
            "        }\n"
            "    }\n"
            "}\n"
        )
        entries = config.excludes("domains")
        assert entries.contains_suffix("example.org")
        assert entries.contains_suffix("sub.example.org")
        assert not entries.contains_suffix("example.com")


class TestTargetPath:
    """SourceObject.target_path()."""

    def test_source_path(self):
        obj = SourceObject(name="malc0de", source_type=SourceType.URL, node="domains")
        assert obj.target_path(Settings()) == "/etc/dnsmasq.d/domains.malc0de.blacklist.conf"

    def test_aggregate_path_uses_type(self):
        obj = SourceObject(name="includes.[2]", source_type=SourceType.PRE_DOMAIN, node="domains")
        settings = Settings(dir="/tmp", ext="conf")
        assert obj.target_path(settings) == "/tmp/pre-configured-domain.includes.[2].conf"
