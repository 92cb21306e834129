"""
Tests for building command trees from configuration text.

Focus Areas:
1. Tree shape, positions and nesting levels
2. Argument values and raw blocks
3. Input validation and error propagation
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from conftree import Document, Lexer, LexerConfig, Parser, parse, tokenize
from conftree.exceptions import InvalidInputError, UnterminatedQuotedStringError


class TestTreeShape:
    """Test the structure of parsed documents."""

    def test_policy_map_snapshot(self, policy_map):
        """Nesting, argument values, offsets and levels match the source."""
        police_args = [1000000, "exceed-action", "policed-dscp-transmit"]

        assert policy_map.to_dict() == {
            "commands": [
                {
                    "args": ["policy-map", "mypolicy_in"],
                    "pos": 0,
                    "indent": 0,
                    "commands": [
                        {
                            "args": ["class", "myservice_service"],
                            "pos": 24,
                            "indent": 1,
                            "commands": [
                                {
                                    "args": ["police", 300000000, *police_args],
                                    "pos": 50,
                                    "indent": 2,
                                    "commands": [
                                        {
                                            "args": ["set", "dscp", "cs1"],
                                            "pos": 114,
                                            "indent": 3,
                                            "commands": [],
                                        }
                                    ],
                                }
                            ],
                        },
                        {
                            "args": ["class", "other_service"],
                            "pos": 128,
                            "indent": 1,
                            "commands": [
                                {
                                    "args": ["police", 600000000, *police_args],
                                    "pos": 150,
                                    "indent": 2,
                                    "commands": [
                                        {
                                            "args": ["set", "dscp", "cs2"],
                                            "pos": 214,
                                            "indent": 3,
                                            "commands": [],
                                        },
                                        {
                                            "args": ["command_with_no_args"],
                                            "pos": 230,
                                            "indent": 3,
                                            "commands": [],
                                        },
                                    ],
                                }
                            ],
                        },
                    ],
                }
            ]
        }

    def test_parent_links(self, policy_map):
        """Every child points back at the command that owns it."""
        for command in policy_map.each():
            for child in command.commands:
                assert child.parent is command
        assert all(command.parent is None for command in policy_map.commands)

    def test_depth_is_one_below_parent(self, policy_map):
        """Top-level commands have depth 1; children one more than their parent."""
        for command in policy_map.each():
            expected = 1 if command.parent is None else command.parent.depth + 1
            assert command.depth == expected

    def test_partial_outdent(self):
        """A partially outdented line stays a sibling inside the section."""
        text = (
            "class-map match-any foobar\n"
            "  description blah blah blah\n"
            " match access-group fred\n"
        )

        document = parse(text)

        assert document.to_dict() == {
            "commands": [
                {
                    "args": ["class-map", "match-any", "foobar"],
                    "pos": 0,
                    "indent": 0,
                    "commands": [
                        {
                            "args": ["description", "blah", "blah", "blah"],
                            "pos": 29,
                            "indent": 1,
                            "commands": [],
                        },
                        {
                            "args": ["match", "access-group", "fred"],
                            "pos": 57,
                            "indent": 1,
                            "commands": [],
                        },
                    ],
                }
            ]
        }

    def test_flat_commands(self):
        """Unindented lines are all top-level commands with their offsets."""
        text = (
            "ip route 10.0.0.1 255.255.255.255 Null0\n"
            "ip route 9.9.9.199 255.255.255.255 42.42.42.142 name PONIES\n"
            "ip route vrf Mgmt-intf 0.0.0.0 0.0.0.0 9.9.9.199\n"
            "ip route 0.0.0.0 0.0.0.0 6.6.6.169 name PONIES 120\n"
        )

        document = parse(text)

        assert [command.pos for command in document] == [0, 40, 100, 149]
        assert document[3].args == [
            "ip", "route", "0.0.0.0", "0.0.0.0", "6.6.6.169", "name", "PONIES", 120,
        ]  # fmt: skip
        assert all(command.commands == [] for command in document)

    def test_blank_lines(self):
        """Blank lines at the start or in the middle are ignored."""
        for text in ("\ntest config", "preamble\n\ntest config"):
            document = parse(text)

            assert len(document.find_all({"name": "test"})) == 1

    def test_comment_at_end_of_line(self):
        """A trailing comment neither drops the line nor the next one."""
        document = parse("description !\nswitchport access vlan 2\n")

        assert document.find("description") is not None
        assert document.find("switchport").args == ["switchport", "access", "vlan", 2]

    def test_comment_lines_inside_section(self):
        """Unindented ! lines do not split a section."""
        document = parse("interface Gi1\n description x\n!\n shutdown\n!\nhostname r1\n")

        assert [command.line() for command in document.commands] == [
            "interface Gi1",
            "hostname r1",
        ]
        assert [command.line() for command in document[0].commands] == [
            "description x",
            "shutdown",
        ]

    def test_markers_never_become_arguments(self, certificate_chain_text):
        """INDENT and block markers inside a line are skipped, not kept as None."""
        document = parse("  hostname r1\nbanner motd ^C\nhi\n^C\n" + certificate_chain_text)

        assert document[0].args == ["hostname", "r1"]
        assert document[1].args == ["banner", "motd", "\nhi\n"]
        for command in document.each():
            assert None not in command.args

    def test_empty_document(self):
        """Text without commands yields an empty document."""
        document = parse("! nothing here\n\n")

        assert isinstance(document, Document)
        assert len(document) == 0

    def test_source_is_kept(self, policy_map, policy_map_text):
        """The document remembers the text it was parsed from."""
        assert policy_map.source == policy_map_text


class TestArguments:
    """Test argument values in parsed commands."""

    def test_numbers_become_int_and_float(self):
        """Numeric tokens keep their converted types."""
        document = parse("interface FastEthernet0/1\n speed 100\n bandwidth 93.2\n")

        assert document.find("speed").args[1] == 100
        assert document.find("bandwidth").args[1] == 93.2

    def test_quoted_string_argument(self):
        """Quoted strings are single arguments, quotes included."""
        document = parse('snmp-server location "Rack 4, Row 2"\n')

        assert document[0].name == "snmp-server"
        assert document[0].args[-1] == '"Rack 4, Row 2"'

    def test_banner_argument(self):
        """The banner text becomes one argument; markers are dropped."""
        text = "\n\nLorem ipsum dolor sit amet,\nconsectetur adipiscing elit.\n\n"

        document = parse("banner exec ^C" + text + "^C\nhostname r1\n")

        assert document[0].args == ["banner", "exec", text]
        assert document[1].line() == "hostname r1"

    def test_certificate_argument(self, certificate_chain_text, certificate_payload):
        """The certificate payload is the last argument of its command."""
        document = parse(certificate_chain_text)

        chain = document[0]
        assert chain.args == ["crypto", "pki", "certificate", "chain", "TP-self-signed-0123456789"]
        assert len(chain.commands) == 1
        certificate = chain.commands[0]
        assert certificate.args == ["certificate", "self-signed", "01", certificate_payload]
        assert certificate.commands == []
        assert certificate.indent == 1


class TestParserInput:
    """Test parser entry points and input checks."""

    @pytest.mark.parametrize("source", [[], None, 666, b"hostname r1\n"])
    def test_non_text_input_rejected(self, source):
        """Anything but a string is refused before lexing."""
        with pytest.raises(InvalidInputError) as exc_info:
            parse(source)

        assert type(source).__name__ in str(exc_info.value)

    def test_lex_errors_propagate(self):
        """Lexing failures abort the parse."""
        with pytest.raises(UnterminatedQuotedStringError):
            parse('description "oops\nhostname r1\n')

    def test_parse_tokens(self, policy_map_text, policy_map):
        """A pre-lexed token stream builds the same tree."""
        document = Parser().parse_tokens(tokenize(policy_map_text))

        assert document == policy_map
        assert document.source is None

    def test_parser_with_custom_lexer(self):
        """The parser uses the lexer it was given."""
        parser = Parser(Lexer(LexerConfig(certificate_terminator="end")))
        text = "crypto pki certificate chain X\n certificate ca 02\n  AAAA\n  end\n"

        document = parser.parse(text)

        assert document.find("certificate").args[-1] == "AAAA"

    def test_parser_reuse_across_threads(self, policy_map_text, certificate_chain_text):
        """One parser can parse several texts concurrently."""
        parser = Parser()
        texts = [policy_map_text, certificate_chain_text] * 8

        with ThreadPoolExecutor(max_workers=4) as pool:
            documents = list(pool.map(parser.parse, texts))

        assert documents == [parse(text) for text in texts]
