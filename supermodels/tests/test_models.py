import pytest
from pydantic import ValidationError

from supermodels.models import App, assign, reset


def test_zero_value():
    app = App()
    assert (app.AppId, app.Commit, app.ContainerId, app.ImageId, app.Env) == (0, "", "", "", {})


def test_json_field_names_and_order():
    raw = App(AppId=7, Commit="abc123", ContainerId="c1", ImageId="img1", Env={"FOO": "bar"}).model_dump_json()
    assert raw == '{"AppId":7,"Commit":"abc123","ContainerId":"c1","Env":{"FOO":"bar"},"ImageId":"img1"}'


def test_empty_object_decodes_to_zero_value():
    assert App.model_validate_json(b"{}") == App()


def test_reset_clears_in_place():
    app = App(AppId=5, Commit="old", Env={"A": "b"})
    env = app.Env
    assert reset(app) is app
    assert app == App()
    assert env == {"A": "b"}
    assert app.Env is not env


def test_reset_gives_fresh_env_each_time():
    a, b = reset(App()), reset(App())
    a.Env["X"] = "1"
    assert b.Env == {}


def test_assign_copies_every_field():
    dst = App(AppId=1, Commit="x")
    src = App(AppId=2, ImageId="i")
    assign(dst, src)
    assert dst == src


def test_wrong_types_are_rejected():
    with pytest.raises(ValidationError):
        App(AppId="13")
    with pytest.raises(ValidationError):
        App.model_validate_json(b'{"AppId":12.0}')
    with pytest.raises(ValidationError):
        App.model_validate_json(b'{"Env":{"A":1}}')


def test_null_env_still_accepted():
    assert App.model_validate_json(b'{"AppId":1,"Env":null}') == App(AppId=1)
