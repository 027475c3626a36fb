from textwrap import dedent

import pytest

from wspcheck.schema.errors import InvalidEncoding, InvalidPattern, InvalidRetentionList, InvalidRetentions, SchemaError
from wspcheck.schema.loader import load_storage_schemas, parse_storage_schemas
from wspcheck.schema.model import RetentionSpec

GRAPHITE_DEFAULTS = dedent("""\
    # Schema definitions for Whisper files. Entries are scanned in order,
    # and first match wins.

    [carbon]
    pattern = ^carbon\\.
    retentions = 60:90d

    [collectd]   # per-host system stats
    pattern = ^collectd\\.
    retentions = 10s:1d, 1m:30d , 10m:1y
    xFilesFactor = 0.1

    [empty]

    [default_1min_for_1day]
    pattern = .*
    retentions = 60s:1d
""")


def test_single_default_section():
    schemas = parse_storage_schemas("[default]\npattern = .*\nretentions = 10s:6h, 1m:7d\n")
    assert len(schemas) == 1
    s = schemas[0]
    assert s.name == "default"
    assert s.pattern.search("anything.at.all")
    assert s.pattern.search("")
    assert s.retentions == (RetentionSpec(10, 21600), RetentionSpec(60, 604800))
    assert s.line_no == 1


def test_file_order_and_line_numbers():
    # "60:90d" has no unit on the resolution, so use a file that parses
    text = GRAPHITE_DEFAULTS.replace("60:90d", "1m:90d")
    schemas = parse_storage_schemas(text)
    assert [s.name for s in schemas] == ["carbon", "collectd", "default_1min_for_1day"]
    assert [s.line_no for s in schemas] == [4, 8, 15]
    assert schemas[1].pattern_raw == "^collectd\\."
    assert schemas[1].retentions == (
        RetentionSpec(10, 86400),
        RetentionSpec(60, 30 * 86400),
        RetentionSpec(600, 31536000),
    )


def test_unitless_duration_aborts_parse():
    with pytest.raises(InvalidRetentions) as exc:
        parse_storage_schemas(GRAPHITE_DEFAULTS)
    assert exc.value.section == "carbon"


def test_inline_comment_cuts_value():
    schemas = parse_storage_schemas("[a]\npattern = foo#bar\nretentions = 1m:1d # one day\n")
    assert schemas[0].pattern_raw == "foo"
    assert schemas[0].retentions == (RetentionSpec(60, 86400),)


def test_keys_are_case_insensitive_and_unknown_keys_ignored():
    schemas = parse_storage_schemas("[a]\nPATTERN = ^a\\.\nRetentions = 1m:1d\naggregationMethod = sum\n")
    assert schemas[0].pattern_raw == "^a\\."
    assert len(schemas[0].retentions) == 1


def test_empty_sections_are_dropped():
    assert parse_storage_schemas("[one]\n[two]\n# nothing here\n") == []
    assert parse_storage_schemas("") == []


def test_section_with_only_retentions_never_has_pattern():
    schemas = parse_storage_schemas("[orphan]\nretentions = 1m:1d\n")
    assert schemas[0].pattern is None
    assert schemas[0].pattern_raw == ""


def test_section_with_only_pattern_has_no_retentions():
    schemas = parse_storage_schemas("[loose]\npattern = ^x\n")
    assert schemas[0].retentions == ()


def test_keys_before_first_header_are_ignored():
    schemas = parse_storage_schemas("pattern = .*\nretentions = 1m:1d\n[a]\npattern = ^a\nretentions = 1s:1m\n")
    assert len(schemas) == 1
    assert schemas[0].pattern_raw == "^a"


def test_later_key_overrides_earlier_in_same_section():
    schemas = parse_storage_schemas("[a]\npattern = ^a\npattern = ^b\nretentions = 1m:1d\n")
    assert schemas[0].pattern_raw == "^b"


def test_bad_pattern_aborts_whole_parse():
    text = "[ok]\npattern = ^ok\nretentions = 1m:1d\n[broken]\npattern = ([a-z\nretentions = 1m:1d\n"
    with pytest.raises(InvalidPattern) as exc:
        parse_storage_schemas(text)
    assert exc.value.section == "broken"
    assert "broken" in str(exc.value)


def test_missing_colon_aborts_with_retention_list_error():
    with pytest.raises(InvalidRetentionList):
        parse_storage_schemas("[a]\npattern = .*\nretentions = 10s\n")


def test_load_from_file(tmp_path):
    conf = tmp_path / "storage-schemas.conf"
    conf.write_text("[stats]\npattern = ^stats\\.\nretentions = 10s:6h,1m:7d\n", encoding="utf-8")
    schemas = load_storage_schemas(conf)
    assert [s.name for s in schemas] == ["stats"]


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_storage_schemas(tmp_path / "nope.conf")


def test_only_newline_ends_a_line():
    schemas = parse_storage_schemas("# a\x0cb\n[x]\npattern = x\n")
    assert schemas[0].line_no == 2

    schemas = parse_storage_schemas("[x]\npattern = a\x85b\x0bc\nretentions = 1m:1d\n")
    assert schemas[0].pattern_raw == "a\x85b\x0bc"
    assert schemas[0].pattern.search("a\x85b\x0bc")


def test_crlf_line_endings():
    schemas = parse_storage_schemas("# header\r\n[x]\r\npattern = ^x$\r\nretentions = 1m:1d\r\n")
    assert schemas[0].line_no == 2
    assert schemas[0].pattern_raw == "^x$"
    assert schemas[0].retentions == (RetentionSpec(60, 86400),)


def test_load_crlf_file_keeps_line_numbers(tmp_path):
    conf = tmp_path / "storage-schemas.conf"
    conf.write_bytes(b"# one\r\n# two\r\n[x]\r\npattern = ^x\r\nretentions = 1m:1d\r\n")
    assert load_storage_schemas(conf)[0].line_no == 3


def test_load_non_utf8_file(tmp_path):
    conf = tmp_path / "storage-schemas.conf"
    conf.write_bytes(b"# caf\xe9\n[a]\npattern = ^a\nretentions = 1m:1d\n")
    with pytest.raises(InvalidEncoding) as exc:
        load_storage_schemas(conf)
    assert isinstance(exc.value, SchemaError)
    assert "not valid UTF-8" in str(exc.value)
