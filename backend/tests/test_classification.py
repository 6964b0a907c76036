from services.classification import ContentType, DetectionSettings, classify
from services.content_filter import Sensitivity


def test_offensive_text_is_a_warning():
    settings = DetectionSettings(content_sensitivity=Sensitivity.LOW)
    assert classify("this is so stupid and dumb", settings) is ContentType.warning


def test_offensive_detection_suppresses_sentiment():
    # Both offensive and strongly negative
    assert classify("I hate this stupid product, it sucks", DetectionSettings()) is ContentType.warning


def test_negative_sentiment_when_not_offensive():
    assert classify("This is terrible and awful", DetectionSettings()) is ContentType.negative


def test_single_match_below_low_threshold_falls_through_to_sentiment():
    settings = DetectionSettings(content_sensitivity=Sensitivity.LOW)
    assert classify("this is stupid", settings) is ContentType.negative


def test_neutral_text_needs_no_action():
    assert classify("The weather is pleasant and calm today", DetectionSettings()) is None


def test_all_detection_disabled():
    settings = DetectionSettings(content_detection=False, sentiment_analysis=False)
    assert classify("I hate this stupid product, it sucks", settings) is None


def test_content_detection_disabled_uses_sentiment_only():
    settings = DetectionSettings(content_detection=False)
    assert classify("I hate this stupid product, it sucks", settings) is ContentType.negative


def test_sentiment_disabled_leaves_negative_text_alone():
    settings = DetectionSettings(sentiment_analysis=False)
    assert classify("This is terrible and awful", settings) is None


def test_sentiment_sensitivity_shifts_threshold():
    text = " ".join(["word"] * 41)
    assert classify(text, DetectionSettings(sentiment_sensitivity=Sensitivity.MEDIUM)) is None
    assert classify(text, DetectionSettings(sentiment_sensitivity=Sensitivity.HIGH)) is ContentType.negative


def test_settings_accept_extension_field_names():
    settings = DetectionSettings.model_validate(
        {"contentDetection": False, "sentimentAnalysis": True, "contentRephrasing": False, "contentSensitivity": 1}
    )

    assert settings.content_detection is False
    assert settings.content_rephrasing is False
    assert settings.content_sensitivity is Sensitivity.LOW
