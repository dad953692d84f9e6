import json

from tests.helpers.detector_imports import AuthForm, BatchArtifact, DetectionArtifact, InputDescriptor


def _sample_form() -> AuthForm:
    return AuthForm(
        has_password_input=True,
        form_element='<form><input name="e" type="email"/></form>',
        parent_element='<form><input name="e" type="email"/></form>',
        input_count=1,
        password_inputs=(),
        other_inputs=(InputDescriptor(selector='<input name="e" type="email"/>', name="e", type="email"),),
    )


def test_empty_report_uses_historical_keys():
    data = AuthForm.empty().to_dict()

    assert data == {
        "hasPasswordInput": False,
        "formElement": None,
        "parentElement": None,
        "inputCount": 0,
        "passwordInputs": [],
        "otherInputs": [],
    }


def test_descriptor_omits_absent_fields():
    descriptor = InputDescriptor(selector="<input/>", name="e", type="email")

    assert descriptor.to_dict() == {"selector": "<input/>", "name": "e", "type": "email"}
    assert descriptor.dedupe_key == (None, "e", "email")


def test_auth_form_save_and_load(tmp_path):
    report = _sample_form()
    path = tmp_path / "auth_form.json"

    report.save(path)

    assert AuthForm.load(path) == report
    assert report.auth_surface_detected is True


def test_batch_artifact_json(tmp_path):
    artifact = DetectionArtifact(
        source="https://example.com",
        auth_form=_sample_form(),
        summary="summary",
        status=200,
    )
    batch = BatchArtifact(artifacts=[artifact])
    path = tmp_path / "batch.json"

    batch.save(path)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["results"][0]["source"] == "https://example.com"
    assert data["results"][0]["status"] == 200
    assert "error" not in data["results"][0]
    assert data["results"][0]["authForm"]["hasPasswordInput"] is True
    assert batch.detected_sources == ("https://example.com",)
