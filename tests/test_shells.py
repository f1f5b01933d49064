import subprocess
from unittest.mock import patch

import pytest

from lazysh.shells import Bash, Fish, ShellError, Zsh, shell_for_name


def _done(stdout):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


@pytest.mark.parametrize(
    "name,cls",
    [("bash", Bash), ("zsh", Zsh), ("fish", Fish), ("tcsh", Bash), ("", Bash)],
)
def test_shell_for_name(name, cls):
    assert type(shell_for_name(name)) is cls


@pytest.mark.parametrize("shell,ext", [(Bash(), ".bash"), (Zsh(), ".zsh"), (Fish(), ".fish")])
def test_extension(shell, ext):
    assert shell.extension == ext


@pytest.mark.parametrize("shell", [Bash(), Zsh(), Fish()])
def test_make_prefix(shell):
    assert shell.make_prefix("eval init") == "eval init 1>&2\n"


def test_bash_run_strips_and_inherits_env(monkeypatch):
    monkeypatch.setenv("LAZYSH_TEST_VAR", "kept")
    with patch("lazysh.shells.subprocess.run", return_value=_done("\nout\n\n")) as run:
        assert Bash().run("echo out") == "out"
    argv = run.call_args.args[0]
    env = run.call_args.kwargs["env"]
    assert argv == ["bash", "--norc", "-c", "echo out"]
    assert env["DISABLE_LAZY"] == "1"
    assert env["LAZYSH_TEST_VAR"] == "kept"


def test_zsh_run_argv():
    with patch("lazysh.shells.subprocess.run", return_value=_done("x\n")) as run:
        assert Zsh().run("cmd") == "x"
    assert run.call_args.args[0] == ["zsh", "--no-rcs", "-c", "cmd"]


def test_fish_run_uses_only_marker_env():
    with patch("lazysh.shells.subprocess.run", return_value=_done("x")) as run:
        assert Fish().run("cmd") == "x"
    assert run.call_args.args[0] == ["fish", "-Nc", "cmd"]
    assert run.call_args.kwargs["env"] == {"DISABLE_LAZY": "1"}


def test_run_failure_raises():
    err = subprocess.CalledProcessError(1, ["bash"])
    with patch("lazysh.shells.subprocess.run", side_effect=err):
        with pytest.raises(ShellError, match="^Failed to run echo"):
            Bash().run("echo")


def test_missing_shell_raises():
    with patch("lazysh.shells.subprocess.run", side_effect=FileNotFoundError("zsh")):
        with pytest.raises(ShellError):
            Zsh().run("echo")


def test_bash_aliases_via_run():
    output = "alias gs='git status'\nalias ll='ls -l'\n"
    with patch("lazysh.shells.subprocess.run", return_value=_done(output)) as run:
        aliases = Bash().aliases("init 1>&2\n")
    assert aliases == {"gs": "git status", "ll": "ls -l"}
    assert run.call_args.args[0][-1] == "init 1>&2\nalias"


def test_bash_path_via_run():
    with patch("lazysh.shells.subprocess.run", return_value=_done("/a:/b\n")) as run:
        assert Bash().path("") == ["/a", "/b"]
    assert run.call_args.args[0][-1] == "echo $PATH"


def test_bash_parse_aliases_skips_noise():
    assert Bash().parse_aliases("garbage\n\nalias x='y'") == {"x": "y"}


def test_bash_parse_functions():
    output = "foo () \n{ \n    echo hi\n}\nbar () \n{ \n    one;\n    two\n}"
    assert Bash().parse_functions(output) == {
        "foo": "\n    echo hi",
        "bar": "\n    one;\n    two",
    }


def test_bash_functions_via_run():
    output = "foo () \n{ \n    echo hi\n}"
    with patch("lazysh.shells.subprocess.run", return_value=_done(output)) as run:
        assert Bash().functions("p\n") == {"foo": "\n    echo hi"}
    assert run.call_args.args[0][-1] == "p\ndeclare -f"


def test_zsh_parse_aliases():
    assert Zsh().parse_aliases("ll='ls -l'\nnoequals\ngs=git") == {
        "ll": "'ls -l'",
        "gs": "git",
    }


def test_zsh_parse_functions():
    output = "foo () {\n\techo hi\n}\nbar () {\n\tls\n}"
    assert Zsh().parse_functions(output) == {"foo": "\n\techo hi", "bar": "\n\tls"}


def test_fish_parse_aliases():
    assert Fish().parse_aliases("alias ll ls\nnope") == {"ll": "ls"}


@pytest.mark.parametrize(
    "shell,output,expected",
    [
        (Bash(), "/a:/b", ["/a", "/b"]),
        (Zsh(), "", [""]),
        (Fish(), "/a /b", ["/a", "/b"]),
    ],
)
def test_parse_path(shell, output, expected):
    assert shell.parse_path(output) == expected


def test_fish_functions_via_run():
    outputs = [_done("a\nb\n"), _done("/p/a.fish\n/p/b.fish\n")]
    with patch("lazysh.shells.subprocess.run", side_effect=outputs) as run:
        result = Fish().functions("")
    assert result == {"a": "/p/a.fish", "b": "/p/b.fish"}
    assert run.call_args_list[0].args[0][-1] == "functions"
    assert run.call_args_list[1].args[0][-1] == "functions --details a && functions --details b"


def test_fish_function_details_too_many_lines():
    with pytest.raises(ShellError):
        Fish().parse_function_details(["a"], "x\ny")


def test_fish_function_details_fewer_lines():
    assert Fish().parse_function_details(["a", "b"], "x") == {"a": "x"}


@pytest.mark.parametrize("shell", [Bash(), Zsh()])
def test_posix_stubs(shell):
    expected = "ll() { __f;eval init;ll $@; }"
    assert shell.format_alias("ll", "eval init", "__f") == expected
    assert shell.format_command("ll", "eval init", "__f") == expected


@pytest.mark.parametrize("shell", [Bash(), Zsh()])
def test_posix_alias_function(shell):
    assert shell.format_command_alias_function("__f", []) == "__f() { :; }"
    assert (
        shell.format_command_alias_function("__f", ["a", "b"])
        == "__f() { a () { command a $@; };b () { command b $@; }; }"
    )


def test_fish_stubs():
    expected = "function ll;__f;eval init;ll $argv;end"
    assert Fish().format_alias("ll", "eval init", "__f") == expected
    assert Fish().format_command("ll", "eval init", "__f") == expected


def test_fish_alias_function():
    assert Fish().format_command_alias_function("__f", []) == "function __f;;end"
    assert (
        Fish().format_command_alias_function("__f", ["a", "b"])
        == 'function __f;alias a="command a";alias b="command b";end'
    )