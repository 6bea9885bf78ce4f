"""Command-line front-end for the Feistel cipher and its cryptanalysis tests.

Usage:
    python scripts/feistel_cli.py keys                              # show round keys
    python scripts/feistel_cli.py --key FFFFFFFFFFFFFFFF encrypt ABCDEFGH
    python scripts/feistel_cli.py decrypt 0123456789ABCDEF --trace
    python scripts/feistel_cli.py avalanche TESTTEST
    python scripts/feistel_cli.py evaluate --sac-trials 16 --output runs

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from feistelab.cipher.codec import format_hex
from feistelab.config import load_settings
from feistelab.errors import FeistelabError
from feistelab.evaluation.avalanche import compute_sac
from feistelab.evaluation.report import EvaluationReport
from feistelab.evaluation.roundtrip import run_roundtrip_tests
from feistelab.evaluation.sbox_analysis import analyze_all_sboxes
from feistelab.formatting import format_binary, format_round_keys, format_sbox
from feistelab.session import CipherSession
from feistelab.utils.repro import make_run_dir, write_json, write_text

logger = logging.getLogger("feistel_cli")


def _cli_progress(current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%)", file=sys.stderr)


def _cmd_keys(session: CipherSession, args: argparse.Namespace) -> None:
    print("========== ROUND KEYS ==========")
    for line in format_round_keys(session.round_keys):
        print(line)
    print("================================")


def _cmd_sbox(session: CipherSession, args: argparse.Namespace) -> None:
    if not 1 <= args.round <= len(session.sboxes):
        raise FeistelabError(f"round must be in 1..{len(session.sboxes)}")
    print(f"S-box for Round {args.round}:")
    for line in format_sbox(session.sboxes[args.round - 1]):
        print(line)


def _cmd_encrypt(session: CipherSession, args: argparse.Namespace) -> None:
    block, hex_out = session.encrypt_block(args.plaintext, trace=args.trace)
    print(f"Encrypted Hexadecimal Output: {hex_out}")
    print(f"Encrypted Binary Output: {format_binary(block)}")


def _cmd_decrypt(session: CipherSession, args: argparse.Namespace) -> None:
    raw, text = session.decrypt_block(args.ciphertext, trace=args.trace)
    block = int.from_bytes(raw, "big")
    print(f"Decrypted Hexadecimal Output: {format_hex(block)}")
    print(f"Decrypted Binary Output: {format_binary(block)}")
    print(f'Decrypted Text: "{text}"')


def _cmd_avalanche(session: CipherSession, args: argparse.Namespace) -> None:
    result = session.run_avalanche_test(args.text)
    print(result.summary())
    print(f"Original Binary Output: {format_binary(result.ciphertext)}")
    print(f"Flipped Binary Output:  {format_binary(result.flipped_ciphertext)}")


def _cmd_differential(session: CipherSession, args: argparse.Namespace) -> None:
    result = session.run_differential_test(args.text)
    print(f"Differential Output: {format_hex(result.xor_differential)}")
    print("Flipped Bit Positions: " + " ".join(str(p) for p in result.flipped_bit_positions))


def _cmd_linear(session: CipherSession, args: argparse.Namespace) -> None:
    print(session.run_linear_test(args.text).summary())


def _cmd_evaluate(session: CipherSession, args: argparse.Namespace) -> None:
    settings = load_settings()
    seed = args.seed if args.seed is not None else settings.global_seed
    trials = args.sac_trials or settings.sac_trials
    vectors = args.roundtrip_vectors or settings.roundtrip_vectors
    key_mixing = session.cipher.key_mixing

    logger.info("Running roundtrip verification (%d vectors)", vectors)
    rt = run_roundtrip_tests(num_vectors=vectors, seed=seed, key_mixing=key_mixing)

    logger.info("Running SAC analysis (%d trials)", trials)
    sac_results = [
        compute_sac(input_type=kind, trials=trials, seed=seed, key_mixing=key_mixing,
                    progress_callback=_cli_progress if args.verbose else None)
        for kind in ("plaintext", "key")
    ]

    logger.info("Analyzing round S-boxes")
    sbox_results = analyze_all_sboxes()

    probe = args.text
    report = EvaluationReport(
        key_hex=session.key_hex,
        key_mixing=key_mixing,
        analysis_results=[
            session.run_avalanche_test(probe),
            session.run_differential_test(probe),
            session.run_linear_test(probe),
        ],
        roundtrip_results=[rt],
        sac_results=sac_results,
        sbox_results=sbox_results,
    )
    summary = report.to_summary()
    print(summary)

    if args.output:
        paths = make_run_dir(args.output, f"evaluate_{session.key_hex}")
        write_json(paths.settings_json, settings.model_dump())
        write_json(paths.report_json, report.to_dict())
        write_text(paths.summary_txt, summary)
        print(f"\nAll results saved to: {paths.run_dir}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Didactic 32-round Feistel cipher with dynamic S-boxes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--key", type=str, default=None,
        help="64-bit master key as 16 hex characters (default: FEISTELAB_DEFAULT_KEY)",
    )
    parser.add_argument(
        "--key-mixing", action="store_true", default=None,
        help="Feed round keys into the round function (not compatible with classic ciphertexts)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("keys", help="Show the 32 round keys").set_defaults(func=_cmd_keys)

    p = sub.add_parser("sbox", help="Show the S-box of one round (1-32)")
    p.add_argument("round", type=int)
    p.set_defaults(func=_cmd_sbox)

    p = sub.add_parser("encrypt", help="Encrypt up to 8 characters")
    p.add_argument("plaintext")
    p.add_argument("--trace", action="store_true", help="Log every round")
    p.set_defaults(func=_cmd_encrypt)

    p = sub.add_parser("decrypt", help="Decrypt 16 hex characters")
    p.add_argument("ciphertext")
    p.add_argument("--trace", action="store_true", help="Log every round")
    p.set_defaults(func=_cmd_decrypt)

    for name, func, text in (
        ("avalanche", _cmd_avalanche, "Avalanche effect of a one-bit input flip"),
        ("differential", _cmd_differential, "XOR differential of a one-bit input flip"),
        ("linear", _cmd_linear, "Parity of input vs output bits"),
    ):
        p = sub.add_parser(name, help=text)
        p.add_argument("text", help="Up to 8 characters, zero padded")
        p.set_defaults(func=func)

    p = sub.add_parser("evaluate", help="Roundtrip, SAC and S-box report")
    p.add_argument("--text", default="TESTTEST", help="Probe input for the single-sample tests")
    p.add_argument("--sac-trials", type=int, default=None, help="SAC trials (default: FEISTELAB_SAC_TRIALS)")
    p.add_argument("--roundtrip-vectors", type=int, default=None,
                   help="Roundtrip vectors (default: FEISTELAB_ROUNDTRIP_VECTORS)")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: GLOBAL_SEED)")
    p.add_argument("--output", type=str, default=None, help="Directory for a JSON report run folder")
    p.set_defaults(func=_cmd_evaluate)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if getattr(args, "trace", False):
        logging.getLogger("feistelab.session").setLevel(logging.DEBUG)

    key_mixing = settings.key_mixing if args.key_mixing is None else args.key_mixing
    try:
        session = CipherSession.set_key(args.key or settings.default_key, key_mixing=key_mixing)
        args.func(session, args)
    except FeistelabError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
