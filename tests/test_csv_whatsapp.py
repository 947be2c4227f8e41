from urllib.parse import unquote

import pytest

from dress_studio.utils.csv_export import render_csv, write_export
from dress_studio.utils.whatsapp import (
    build_whatsapp_link,
    format_display_date,
    normalize_phone,
    render_template,
)


class TestRenderCsv:
    def test_header_is_bare_and_fields_are_quoted(self):
        rows = [
            {"id": 1, "name": "Gown", "price": 500.0},
            {"id": 2, "name": "Veil", "price": 80.5},
        ]

        assert render_csv(rows) == (
            'id,name,price\n"1","Gown","500"\n"2","Veil","80.5"'
        )

    def test_none_becomes_empty(self):
        assert render_csv([{"a": None, "b": "x"}]) == 'a,b\n"","x"'

    def test_embedded_quotes_and_commas(self):
        assert render_csv([{"note": 'say "hi", then go'}]) == (
            'note\n"say ""hi"", then go"'
        )

    def test_no_rows(self):
        assert render_csv([]) == ""

    def test_write_export(self, tmp_path):
        path = write_export("dresses", 'id\n"1"', exports_dir=tmp_path)

        assert path.parent == tmp_path
        assert path.name.startswith("dresses_")
        assert path.suffix == ".csv"
        assert path.read_text(encoding="utf-8-sig") == 'id\n"1"'


class TestWhatsapp:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("050-123-4567", "972501234567"),
            ("(050) 1234567", "972501234567"),
            ("+972 50 123 4567", "972501234567"),
            ("972501234567", "972501234567"),
        ],
    )
    def test_normalize_phone(self, raw, expected):
        assert normalize_phone(raw) == expected

    def test_normalize_phone_other_country(self):
        assert normalize_phone("07700 900123", country_code="44") == "447700900123"

    def test_display_date(self):
        assert format_display_date("2024-07-01") == "1.7.2024"
        assert format_display_date("2024-12-25") == "25.12.2024"

    def test_render_template_with_time(self):
        message = render_template(
            "{customer_name} {date}{time} {dress_name}",
            customer_name="Dana",
            date="1.7.2024",
            time="10:30",
            dress_name="Gown",
        )

        assert message == "Dana 1.7.2024 בשעה 10:30 Gown"

    def test_render_template_without_time(self):
        message = render_template("{date}{time}.", date="1.7.2024")

        assert message == "1.7.2024."

    def test_unknown_placeholders_are_kept(self):
        assert render_template("{other} {customer_name}", customer_name="Dana") == (
            "{other} Dana"
        )

    def test_link_encodes_message(self):
        link = build_whatsapp_link("050-1234567", "שלום Dana\nמחר")

        base, _, query = link.partition("?text=")
        assert base == "https://wa.me/972501234567"
        assert " " not in query
        assert "\n" not in query
        assert unquote(query) == "שלום Dana\nמחר"
