"""
Lexer configuration for conftree.

This module provides the knobs that decide which characters open comments and
quoted strings, and which keywords switch the lexer into its raw banner and
certificate capture modes.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import Any


@dataclass
class LexerConfig:
    """Configuration for configuration-dump tokenization.

    Can be created from dict, YAML, or Path with partial overrides.
    Only specified values override defaults.

    Examples:
        # All defaults (Cisco IOS style dumps)
        config = LexerConfig()

        # Partial override from dict
        config = LexerConfig.from_dict({"certificate_terminator": "end"})

        # From YAML file
        config = LexerConfig.from_yaml("lexer.yaml")
    """

    # Characters that turn a whole line into a comment when they lead it
    comment_chars: str = "!#"
    # Characters that end the line when they start a token mid-line
    inline_comment_chars: str = "!"
    quote_chars: str = "'\""

    banner_keyword: str = "banner"
    # Words that may precede the banner keyword directly (aaa authentication banner ^C)
    banner_qualifiers: tuple[str, ...] = ("authentication",)
    # Closing word for banners whose delimiter is the end of the opening line
    banner_eof_delimiter: str = "EOF"
    # Drop a word glued onto the closing banner delimiter (the C of ^C)
    scrub_banner_residue: bool = True

    certificate_keyword: str = "certificate"
    certificate_terminator: str = "quit"

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> LexerConfig:
        """Create from dict, only overriding specified values.

        Args:
            config: Dictionary with partial overrides. Only keys matching
                   dataclass fields will be used.

        Returns:
            LexerConfig instance with specified overrides
        """
        valid_fields = {f.name for f in dataclass_fields(cls)}
        filtered = {k: v for k, v in config.items() if k in valid_fields}
        if "banner_qualifiers" in filtered:
            filtered["banner_qualifiers"] = tuple(filtered["banner_qualifiers"])
        return cls(**filtered)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> LexerConfig:
        """Create from YAML file with partial overrides.

        Args:
            yaml_path: Path to YAML file containing configuration

        Returns:
            LexerConfig instance with YAML overrides

        Example YAML:
            banner_eof_delimiter: "END_BANNER"
            banner_qualifiers: [authentication, login]
        """
        import yaml

        path = Path(yaml_path)
        with path.open() as f:
            config = yaml.safe_load(f) or {}

        return cls.from_dict(config)
