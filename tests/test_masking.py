from notilify._masking import dest_hint

def test_dest_hint():
    assert dest_hint("+15551234567") == "...4567"
    assert dest_hint("  12 ") == "12"
    assert dest_hint("") == ""
