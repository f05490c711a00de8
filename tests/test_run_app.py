import importlib.util
import sys
from pathlib import Path

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "run_app.py"


def load_run_app():
    module_spec = importlib.util.spec_from_file_location("run_app", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def test_command_targets_streamlit_screen():
    run_app = load_run_app()
    cmd = run_app.build_command(["--server.port", "8600"])
    assert cmd[:4] == [sys.executable, "-m", "streamlit", "run"]
    assert cmd[4].endswith("app_streamlit.py")
    assert cmd[-2:] == ["--server.port", "8600"]
    assert run_app.UI_MODULE.exists()
