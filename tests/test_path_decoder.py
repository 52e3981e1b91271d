import pytest

from animeflow_proxy.utils.path_decoder import SOURCE_PATH_TABLE, decode_source_path


@pytest.mark.parametrize("pair, expected", sorted(SOURCE_PATH_TABLE.items()))
def test_every_table_entry_decodes_to_its_character(pair, expected):
    assert decode_source_path(pair) == expected
    assert decode_source_path(f"--{pair}") == expected


def test_table_is_a_bijection_over_its_entries():
    assert len(SOURCE_PATH_TABLE) == 84
    assert len(set(SOURCE_PATH_TABLE.values())) == len(SOURCE_PATH_TABLE)
    assert all(len(pair) == 2 and pair == pair.lower() for pair in SOURCE_PATH_TABLE)


def test_decodes_provider_path_and_appends_json_to_clock_segment():
    token = "--175948514e4c4f57175b54575b5307515c05595a5b"
    assert decode_source_path(token) == "/apivtwo/clock.json?id=abc"


def test_clock_segment_gets_json_suffix():
    assert decode_source_path("--175b54575b53") == "/clock.json"


def test_only_first_clock_segment_is_rewritten():
    assert decode_source_path("175b54575b53175b54575b53") == "/clock.json/clock"


def test_decoding_is_deterministic():
    token = "--175948514e4c4f57175b54575b5307515c05404142"
    assert decode_source_path(token) == decode_source_path(token)


def test_prefix_is_only_stripped_at_the_start():
    assert decode_source_path("5915") == "a-"
    assert decode_source_path("59--") == "a--"


def test_unmapped_hex_pair_decodes_as_byte_value():
    # 0x20 is not part of the substitution table
    assert decode_source_path("20") == " "
    assert decode_source_path("5920") == "a "


def test_non_hex_pair_passes_through():
    assert decode_source_path("59zz") == "azz"


def test_trailing_odd_character_is_dropped():
    assert decode_source_path("595") == "a"


def test_empty_token():
    assert decode_source_path("") == ""
    assert decode_source_path("--") == ""
