"""
CLI Tests
Tests for merkle_cli/main.py and the prove/verify commands.

Each test runs main(argv) in a temporary working directory with a clean
MERKLE_* environment.
"""
import json

import pytest

from merkle_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    create_parser,
    main,
)
from fixtures import WORKED_EXAMPLE_ELEMENTS, WORKED_EXAMPLE_ROOT, make_elements


@pytest.fixture(autouse=True)
def workdir(clean_env, tmp_path):
    clean_env.chdir(tmp_path)
    return tmp_path


class TestParser:
    """Tests for create_parser()."""

    def test_prove_requires_index(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["prove", "a"])

    def test_rejects_unknown_algorithm(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["root", "--hash-algorithm", "md5", "a"])

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR


class TestRootCommand:
    """Tests for `merkle root`."""

    def test_root_human(self, capsys):
        assert main(["root", *WORKED_EXAMPLE_ELEMENTS]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert f"root: {WORKED_EXAMPLE_ROOT}" in out
        assert "height: 2" in out

    def test_root_json(self, capsys):
        assert main(["root", "--json", *WORKED_EXAMPLE_ELEMENTS]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["root"] == WORKED_EXAMPLE_ROOT
        assert data["size"] == 3

    def test_elements_from_json_file(self, workdir, capsys):
        path = workdir / "elements.json"
        path.write_text(json.dumps(WORKED_EXAMPLE_ELEMENTS))

        assert main(["root", "--elements-file", str(path)]) == EXIT_SUCCESS
        assert WORKED_EXAMPLE_ROOT in capsys.readouterr().out

    def test_elements_from_text_file(self, workdir, capsys):
        path = workdir / "elements.txt"
        path.write_text("some\ntest\nelements\n")

        assert main(["root", "-f", str(path)]) == EXIT_SUCCESS
        assert WORKED_EXAMPLE_ROOT in capsys.readouterr().out

    def test_bad_elements_file(self, workdir, capsys):
        path = workdir / "elements.json"
        path.write_text(json.dumps({"not": "a list"}))

        assert main(["root", "-f", str(path)]) == EXIT_RUNTIME_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_empty_rejected_by_env(self, clean_env, capsys):
        clean_env.setenv("MERKLE_ALLOW_EMPTY", "false")

        assert main(["root"]) == EXIT_RUNTIME_ERROR
        assert "zero elements" in capsys.readouterr().err

    def test_algorithm_from_config_file(self, workdir, capsys):
        (workdir / "merkle.yaml").write_text("merkle:\n  hash_algorithm: sha512\n")

        assert main(["root", "--json", "a"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["hash_algorithm"] == "sha512"


class TestProveAndVerify:
    """Tests for `merkle prove` / `merkle verify`."""

    def test_prove_then_verify(self, workdir, capsys):
        proof_path = workdir / "proof.json"

        assert main(
            ["prove", "--index", "2", "--out", str(proof_path), *WORKED_EXAMPLE_ELEMENTS]
        ) == EXIT_SUCCESS

        document = json.loads(proof_path.read_text())
        assert document["root"] == WORKED_EXAMPLE_ROOT
        assert document["proof"]["directions"] == [False, True]

        assert main(
            ["verify", "--root", WORKED_EXAMPLE_ROOT, "--proof", str(proof_path)]
        ) == EXIT_SUCCESS
        assert "valid: true" in capsys.readouterr().out

    def test_verify_wrong_root(self, workdir, capsys):
        proof_path = workdir / "proof.json"
        main(["prove", "-i", "0", "-o", str(proof_path), *WORKED_EXAMPLE_ELEMENTS])

        wrong_root = "0" * 64
        assert main(
            ["verify", "--root", wrong_root, "--proof", str(proof_path), "--json"]
        ) == EXIT_VERIFICATION_FAILED
        assert json.loads(capsys.readouterr().out) == {"ok": False, "root": wrong_root}

    def test_verify_bare_proof_object(self, workdir):
        proof_path = workdir / "proof.json"
        main(["prove", "-i", "1", "-o", str(proof_path), *WORKED_EXAMPLE_ELEMENTS])
        bare = json.loads(proof_path.read_text())["proof"]
        proof_path.write_text(json.dumps(bare))

        assert main(
            ["verify", "-r", WORKED_EXAMPLE_ROOT, "-p", str(proof_path)]
        ) == EXIT_SUCCESS

    def test_verify_malformed_proof(self, workdir, capsys):
        proof_path = workdir / "proof.json"
        proof_path.write_text(json.dumps({"siblings": ["aa"], "directions": [True]}))

        assert main(
            ["verify", "-r", WORKED_EXAMPLE_ROOT, "-p", str(proof_path)]
        ) == EXIT_RUNTIME_ERROR
        assert "Malformed proof" in capsys.readouterr().err

    def test_verify_missing_file(self, workdir, capsys):
        assert main(
            ["verify", "-r", WORKED_EXAMPLE_ROOT, "-p", str(workdir / "nope.json")]
        ) == EXIT_RUNTIME_ERROR

    def test_prove_index_out_of_range(self, capsys):
        assert main(["prove", "--index", "3", *WORKED_EXAMPLE_ELEMENTS]) == EXIT_RUNTIME_ERROR
        assert "out of range" in capsys.readouterr().err

    def test_algorithm_must_match(self, workdir):
        proof_path = workdir / "proof.json"
        main(["prove", "-i", "0", "-o", str(proof_path), "--hash-algorithm", "blake2s", "a", "b"])
        root = json.loads(proof_path.read_text())["root"]

        assert main(["verify", "-r", root, "-p", str(proof_path)]) == EXIT_VERIFICATION_FAILED
        assert main(
            ["verify", "-r", root, "-p", str(proof_path), "--hash-algorithm", "blake2s"]
        ) == EXIT_SUCCESS


class TestRangeProveAndVerify:
    """Tests for `merkle range-prove` / `merkle range-verify`."""

    def _bundle(self, workdir, start: int, end: int, count: int = 12):
        bundle_path = workdir / "range.json"
        code = main(
            ["range-prove", "--start", str(start), "--end", str(end),
             "--out", str(bundle_path), *make_elements(count)]
        )
        return code, bundle_path

    def test_round_trip(self, workdir, capsys):
        code, bundle_path = self._bundle(workdir, 2, 9)
        assert code == EXIT_SUCCESS

        bundle = json.loads(bundle_path.read_text())
        assert bundle["elements"] == make_elements(12)[2:9]

        assert main(
            ["range-verify", "--root", bundle["root"], "--bundle", str(bundle_path)]
        ) == EXIT_SUCCESS

    def test_tampered_element(self, workdir):
        _, bundle_path = self._bundle(workdir, 0, 4)
        bundle = json.loads(bundle_path.read_text())
        bundle["elements"][1] = "forged"
        bundle_path.write_text(json.dumps(bundle))

        assert main(
            ["range-verify", "-r", bundle["root"], "-b", str(bundle_path)]
        ) == EXIT_VERIFICATION_FAILED

    def test_invalid_range(self, workdir, capsys):
        code, _ = self._bundle(workdir, 5, 5)
        assert code == EXIT_RUNTIME_ERROR
        assert "Invalid range" in capsys.readouterr().err

    def test_not_a_bundle(self, workdir, capsys):
        path = workdir / "range.json"
        path.write_text(json.dumps({"proof": {}}))

        assert main(["range-verify", "-r", "00", "-b", str(path)]) == EXIT_RUNTIME_ERROR


class TestConfigCommand:
    """Tests for `merkle config`."""

    def test_init_and_show(self, workdir, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert (workdir / "merkle.yaml").exists()

        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

        capsys.readouterr()
        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["merkle"]["hash_algorithm"] == "sha256"
        assert shown["api"]["max_elements"] == 100000

    def test_explicit_config_path(self, workdir, capsys):
        path = workdir / "custom.json"
        path.write_text(json.dumps({"merkle": {"hash_algorithm": "sha3_512"}}))

        assert main(["--config", str(path), "config", "--show"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["merkle"]["hash_algorithm"] == "sha3_512"

    def test_missing_config_file(self, workdir, capsys):
        assert main(["--config", str(workdir / "missing.yaml"), "root", "a"]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err
