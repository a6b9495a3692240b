from flameshot.styleoverride import StyleHint, StyleOverride


def test_wake_up_delay_is_overridden():
    style = StyleOverride(lambda hint: 9999)
    assert style.style_hint(StyleHint.TOOLTIP_WAKE_UP_DELAY) == 600


def test_other_hints_use_base():
    asked = []

    def base(hint):
        asked.append(hint)
        return 42

    style = StyleOverride(base)
    assert style.style_hint(StyleHint.TOOLTIP_FALL_ASLEEP_DELAY) == 42
    assert asked == [StyleHint.TOOLTIP_FALL_ASLEEP_DELAY]


def test_default_base_returns_zero():
    style = StyleOverride()
    assert style.style_hint(StyleHint.TOOLTIP_LABEL_OPACITY) == 0