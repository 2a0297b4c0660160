"""Listing parsers, one class per manager, fed with captured output samples."""
import pytest


def names(entries):
    return [e.name for e in entries]


def pairs(entries):
    return [(e.name, e.version) for e in entries]


class TestBrewParser:
    def test_versions_listing(self, backends):
        output = "jq 1.7.1\npython@3.12 3.12.1 3.12.2\nripgrep 14.1.0\n"
        assert pairs(backends["brew"].parse_listing(output)) == [
            ("jq", "1.7.1"),
            ("python@3.12", "3.12.2"),
            ("ripgrep", "14.1.0"),
        ]

    def test_warnings_skipped(self, backends):
        output = "Warning: Treating jq as a formula.\njq 1.7.1\n"
        assert names(backends["brew"].parse_listing(output)) == ["jq"]


class TestPortParser:
    def test_installed(self, backends):
        output = (
            "The following ports are currently installed:\n"
            "  jq @1.7.1_0 (active)\n"
            "  oniguruma6 @6.9.9_0 (active)\n"
        )
        assert pairs(backends["port"].parse_listing(output)) == [
            ("jq", "1.7.1_0"),
            ("oniguruma6", "6.9.9_0"),
        ]

    def test_nothing_installed(self, backends):
        assert backends["port"].parse_listing("None of the specified ports are installed.\n") == []


class TestFinkParser:
    def test_tabbed_listing(self, backends):
        output = "Information about 5000 packages read in 1 seconds.\ni\tjq\t1.6-1\tJSON processor\ni\twget\t1.21-1\tDownloader\n"
        assert pairs(backends["fink"].parse_listing(output)) == [("jq", "1.6-1"), ("wget", "1.21-1")]


class TestAptParser:
    def test_installed_lines(self, backends):
        output = (
            "Listing... Done\n"
            "jq/jammy,now 1.6-2.1ubuntu3 amd64 [installed]\n"
            "libjq1/jammy,now 1.6-2.1ubuntu3 amd64 [installed,automatic]\n"
            "zsh/jammy-updates,now 5.8.1-1ubuntu0.1 amd64 [installed,upgradable to: 5.8.1-1ubuntu0.2]\n"
        )
        assert pairs(backends["apt"].parse_listing(output)) == [
            ("jq", "1.6-2.1ubuntu3"),
            ("libjq1", "1.6-2.1ubuntu3"),
            ("zsh", "5.8.1-1ubuntu0.1"),
        ]

    def test_warning_banner_skipped(self, backends):
        output = (
            "\nWARNING: apt does not have a stable CLI interface. Use with caution in scripts.\n\n"
            "Listing...\n"
        )
        assert backends["apt"].parse_listing(output) == []


class TestNalaParser:
    def test_detail_rows_skipped(self, backends):
        output = (
            "jq 1.6-2.1ubuntu3 [Ubuntu/jammy main]\n"
            "└── is installed and automatic\n"
            "zsh 5.8.1-1ubuntu0.1 [Ubuntu/jammy-updates main]\n"
            "└── is installed\n"
        )
        assert pairs(backends["nala"].parse_listing(output)) == [
            ("jq", "1.6-2.1ubuntu3"),
            ("zsh", "5.8.1-1ubuntu0.1"),
        ]


class TestDnfParser:
    def test_header_is_not_an_entry(self, backends):
        output = (
            "Last metadata expiration check: 0:12:01 ago on Mon 01 Jan 2024.\n"
            "Installed Packages\n"
            "bash.x86_64                 5.2.26-3.fc40          @anaconda\n"
            "jq.x86_64                   1.7.1-4.fc40           @fedora\n"
        )
        entries = backends["dnf"].parse_listing(output)
        assert pairs(entries) == [("bash", "5.2.26-3.fc40"), ("jq", "1.7.1-4.fc40")]
        assert "Installed" not in names(entries)

    def test_wrapped_rows_joined(self, backends):
        output = (
            "Installed Packages\n"
            "NetworkManager-libreswan-gnome.x86_64\n"
            "                            1.2.14-4.fc40          @fedora\n"
            "zsh.x86_64                  5.9-14.fc40            @fedora\n"
        )
        assert pairs(backends["dnf"].parse_listing(output)) == [
            ("NetworkManager-libreswan-gnome", "1.2.14-4.fc40"),
            ("zsh", "5.9-14.fc40"),
        ]

    def test_names_with_dots(self, backends):
        output = "Installed Packages\npython3.11.x86_64    3.11.9-1.fc40    @updates\n"
        assert names(backends["yum"].parse_listing(output)) == ["python3.11"]

    def test_epoch_version(self, backends):
        output = "Installed Packages\nvim-enhanced.x86_64   2:9.1.393-1.fc40   @updates\n"
        assert pairs(backends["dnf"].parse_listing(output)) == [("vim-enhanced", "2:9.1.393-1.fc40")]


class TestPacmanParser:
    @pytest.mark.parametrize("manager", ["pacman", "yay", "paru"])
    def test_query_listing(self, backends, manager):
        output = "bash 5.2.026-2\njq 1.7.1-2\n"
        entries = backends[manager].parse_listing(output)
        assert pairs(entries) == [("bash", "5.2.026-2"), ("jq", "1.7.1-2")]
        assert {e.manager for e in entries} == {manager}

    def test_error_lines_skipped(self, backends):
        output = "error: package 'nope' was not found\njq 1.7.1-2\n"
        assert names(backends["pacman"].parse_listing(output)) == ["jq"]


class TestApkParser:
    def test_info_verbose(self, backends):
        output = "WARNING: opening /var/cache/apk: No such file\nbusybox-1.36.1-r15\nca-certificates-bundle-20240226-r0\njq-1.7.1-r0\n"
        assert pairs(backends["apk"].parse_listing(output)) == [
            ("busybox", "1.36.1-r15"),
            ("ca-certificates-bundle", "20240226-r0"),
            ("jq", "1.7.1-r0"),
        ]


class TestNixParser:
    def test_query_listing(self, backends):
        output = "ripgrep-14.1.0\nnix-2.18.1\ngit-minimal-2.44.0\nhello\n"
        assert pairs(backends["nix-env"].parse_listing(output)) == [
            ("ripgrep", "14.1.0"),
            ("nix", "2.18.1"),
            ("git-minimal", "2.44.0"),
            ("hello", None),
        ]


class TestCargoParser:
    def test_only_headers_carry_entries(self, backends):
        output = (
            "cargo-update v13.4.0:\n"
            "    cargo-install-update\n"
            "    cargo-install-update-config\n"
            "ripgrep v14.1.0:\n"
            "    rg\n"
            "mytool v0.1.0 (/home/me/src/mytool):\n"
            "    mytool\n"
        )
        assert pairs(backends["cargo"].parse_listing(output)) == [
            ("cargo-update", "13.4.0"),
            ("ripgrep", "14.1.0"),
            ("mytool", "0.1.0"),
        ]


class TestNpmParser:
    def test_parseable_paths(self, backends):
        output = (
            "/usr/local/lib\n"
            "/usr/local/lib/node_modules/npm\n"
            "/usr/local/lib/node_modules/@vue/cli\n"
            "/usr/local/lib/node_modules/typescript\n"
        )
        entries = backends["npm"].parse_listing(output)
        assert names(entries) == ["npm", "@vue/cli", "typescript"]
        assert all(e.version is None for e in entries)

    def test_empty(self, backends):
        assert backends["npm"].parse_listing("") == []


class TestPipParser:
    def test_table(self, backends):
        output = (
            "Package            Version\n"
            "------------------ ---------\n"
            "pip                24.0\n"
            "requests           2.31.0\n"
            "\n"
            "[notice] A new release of pip is available: 24.0 -> 24.1\n"
            "[notice] To update, run: pip install --upgrade pip\n"
        )
        assert pairs(backends["pip"].parse_listing(output)) == [("pip", "24.0"), ("requests", "2.31.0")]

    def test_editable_column(self, backends):
        output = (
            "Package    Version Editable project location\n"
            "---------- ------- -------------------------\n"
            "pkgbridge  0.1.0   /home/me/pkgbridge\n"
        )
        assert pairs(backends["pip"].parse_listing(output)) == [("pkgbridge", "0.1.0")]


class TestGemParser:
    def test_local_gems(self, backends):
        output = (
            "\n*** LOCAL GEMS ***\n\n"
            "bundler (default: 2.4.10)\n"
            "rake (13.1.0, 13.0.6)\n"
            "rouge (4.2.0)\n"
        )
        assert pairs(backends["gem"].parse_listing(output)) == [
            ("bundler", "2.4.10"),
            ("rake", "13.1.0"),
            ("rouge", "4.2.0"),
        ]


class TestUvParser:
    def test_two_line_blocks(self, backends):
        output = "black v24.4.2\n- black\n- blackd\nruff v0.5.0\n- ruff\n"
        assert pairs(backends["uv"].parse_listing(output)) == [("black", "24.4.2"), ("ruff", "0.5.0")]

    def test_no_tools(self, backends):
        assert backends["uv"].parse_listing("No tools installed\n") == []


class TestPnpmParser:
    def test_dependencies_block(self, backends):
        output = (
            "Legend: production dependency, optional only, dev only\n"
            "\n"
            "/home/me/.local/share/pnpm/global/5\n"
            "\n"
            "dependencies:\n"
            "@antfu/ni 0.21.12\n"
            "typescript 5.4.5\n"
        )
        assert pairs(backends["pnpm"].parse_listing(output)) == [
            ("@antfu/ni", "0.21.12"),
            ("typescript", "5.4.5"),
        ]

    def test_indented_rows(self, backends):
        output = "dependencies:\n  typescript 5.4.5\n"
        assert names(backends["pnpm"].parse_listing(output)) == ["typescript"]


class TestBunParser:
    def test_tree_rows(self, backends):
        output = (
            "/home/me/.bun/install/global node_modules (3)\n"
            "├── @biomejs/biome@1.8.3\n"
            "├── prettier@3.3.2\n"
            "└── typescript@5.4.5\n"
        )
        assert pairs(backends["bun"].parse_listing(output)) == [
            ("@biomejs/biome", "1.8.3"),
            ("prettier", "3.3.2"),
            ("typescript", "5.4.5"),
        ]
