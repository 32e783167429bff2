from crochet_sketch.core.settings import ENV_FRAME_MS, ENV_HOVER_RADIUS, EditorSettings


def test_defaults():
    s = EditorSettings()
    assert (s.canvas_width, s.canvas_height) == (800, 600)
    assert s.hover_radius == 20.0
    assert s.canvas_center == (400.0, 300.0)


def test_from_env_overrides():
    s = EditorSettings.from_env({ENV_HOVER_RADIUS: "12.5", ENV_FRAME_MS: "33"})
    assert s.hover_radius == 12.5
    assert s.frame_interval_ms == 33


def test_from_env_ignores_bad_values():
    s = EditorSettings.from_env({ENV_HOVER_RADIUS: "wide", ENV_FRAME_MS: "-4"})
    assert s.hover_radius == 20.0
    assert s.frame_interval_ms == 16
