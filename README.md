# zkaleido

A small toolkit for writing zero-knowledge VM programs against a pluggable
host. A program describes how its input is written, what the guest does with
it and how the committed public values are read back; a host decides how the
program is executed, proven and verified.

The package ships a **native** host (`zkaleido.native.NativeHost`) that runs
guest logic directly in Python. It produces an empty proof but the same
public values the guest commits, which makes it useful for local testing,
debugging and prototyping.

## Installation

```
pip install zkaleido
```

With the test dependencies:

```
pip install "zkaleido[test]"
```

## Modules

- `zkaleido.vm` – the `ZkVm` enum (`SP1`, `RISC0`, `NATIVE`) and the
  `ProofType` enum (`GROTH16`, `CORE`, `COMPRESSED`).
- `zkaleido.codec` – schema-driven bincode and borsh encoding:
  `encode_bincode`, `decode_bincode`, `encode_borsh`, `decode_borsh`. A
  schema is a `Primitive` (`U8` … `I64`, `BOOL`, `STRING`), a
  `FixedArray(element, length)`, a `Sequence(element)` or a tuple of schemas
  for a struct. Arrays of `U8` map to `bytes`. Bincode decoding ignores
  trailing bytes; borsh decoding requires every byte to be consumed.
- `zkaleido.proof` – `Proof`, `PublicValues`, `VerifyingKey` (byte
  wrappers with `as_bytes` and `is_empty`), `ProofReceipt` (with
  `to_bytes`, `from_bytes`, `save` and `load`), `AggregationInput` and
  `VerifyingKeyCommitment` (eight 32-bit words, `into_inner`).
- `zkaleido.perf` – `ProofMetrics`, `PerformanceReport` (with
  `from_metrics`, which derives end-to-end duration and speed) and
  `time_operation`.
- `zkaleido.errors` – `ZkVmError` and its subclasses `ExecutionError`,
  `ProofGenerationError`, `ProofVerificationError`, `InvalidInputError`,
  `InvalidElfError`, `InvalidVerifyingKeyError`,
  `InvalidProofReceiptError`, `OutputExtractionError`; and the detail
  errors `DataFormatError`, `ZkVmInputError`, `ZkVmVerifyingKeyError`,
  `ZkVmProofError`.
- `zkaleido.interfaces` – the abstract interfaces:
  - `ZkVmEnv` – what guest code sees: read inputs (`read_buf`,
    `read_serde`, `read_borsh`), commit outputs (`commit_buf`,
    `commit_serde`, `commit_borsh`) and verify proofs of other programs
    (`verify_native_proof`, `read_verified_buf`, `read_verified_serde`,
    `read_verified_borsh`).
  - `ZkVmInputBuilder` – collects inputs (`write_serde`, `write_borsh`,
    `write_buf`, `write_proof`) and `build`s them; writers return the
    builder for chaining.
  - `ZkVmExecutor`, `ZkVmProver`, `ZkVmVerifier`, combined in `ZkVmHost`
    (`input_builder`, `execute`, `prove`, `verify`, `vk`,
    `vk_commitment`, `extract_serde_public_output`,
    `extract_borsh_public_output`).
  - `ZkVmHostPerf` adds `perf_report`; `ZkVmRemoteProver` and
    `ZkVmRemoteHost` add the async `start_proving` and
    `get_proof_if_ready`.
- `zkaleido.program` – `ZkVmProgram` (`name`, `proof_type`,
  `prepare_input`, `process_output`, `execute`, `prove`),
  `ZkVmProgramPerf` (`perf_report`), `ZkVmRemoteProgram` (async
  `start_proving`) and `env_flag`.
- `zkaleido.native` – `NativeMachine` (a `ZkVmEnv` over a list of input
  buffers; it accepts every proof), `NativeMachineInputBuilder`,
  `NativeProofReceipt` and `NativeHost`.

## Example

```python
from zkaleido.native import NativeHost
from zkaleido.examples.fibonacci import FibProgram, process_fibonacci

host = NativeHost(process_fibonacci)
program = FibProgram()

receipt = program.prove(5, host)
print(program.process_output(receipt.public_values, host))  # 5
```

The bundled example programs live in `zkaleido.examples`:

- `fibonacci` – `FibProgram`, `process_fibonacci`: the n-th Fibonacci
  number modulo 7919;
- `sha2_chain` – `ShaChainProgram`, `process_sha2_chain`,
  `hash_n_rounds`: SHA-256 applied repeatedly to `"Hello, world!"`;
- `fibonacci_composition` – `FibCompositionProgram`,
  `FibCompositionInput`, `process_fibonacci_composition`: reads a
  Fibonacci result as verified input and commits it again;
- `schnorr` – `SchnorrSigProgram`, `SchnorrSigInput` (with
  `new_random`), `process_schnorr_sig_verify`, `sign_schnorr_sig`,
  `verify_schnorr_sig`, `verify_schnorr_sig_k256`: BIP-340 Schnorr
  signatures over secp256k1, written in pure Python.

Setting the environment variable `ZKVM_PROOF_DUMP` to `1` or `true` makes
`ZkVmProgram.prove` write each receipt to `<program>_<host>.proof`
(for the native host, for example, `fibonacci_native.proof`).

## Performance runner

`zkaleido.runner` holds the pieces of a performance report:

- `programs` – `GuestProgram` (`fibonacci`, `fibonacci-composition`,
  `sha2-chain`, `schnorr-sig-verify`), the report functions
  `fib_report`, `fib_composition_report`, `sha2_report`,
  `schnorr_report`, and `run_programs(programs, host_for)`, where
  `host_for` returns a `ZkVmHostPerf` loaded with a given program.
  `fib_report` sets `ZKVM_MOCK=1` in the environment before reporting.
- `args` – `EvalArgs` and `parse_args`.
- `format` – `format_header` and `format_results` (a table of program
  name, cycles and success).
- `github` – `format_github_message` and the async `post_to_github_pr`,
  which updates the comment of `github-actions[bot]` on the pull request or
  posts a new one. The repository is read from `GITHUB_REPOSITORY`.
- `main` – `run(args, backends)`, where each backend is a pair of a
  display name and a `host_for` function; it prints the results and returns
  1 as soon as a backend has a failed report, otherwise 0.

The `zkaleido-runner` command parses its options and calls `run`:

```
zkaleido-runner --programs fibonacci,sha2-chain
```

Options:

- `--programs` – comma-separated list of programs (may be repeated);
- `--commit-hash` – commit shown in the header when posting (default
  `local_commit`; at least 8 characters are needed with `--post-to-gh`);
- `--post-to-gh` – post (or update) the results as a pull request comment;
- `--github-token` – token used for the GitHub API;
- `--pr-number` – the pull request to comment on.

```
GITHUB_REPOSITORY=owner/repo zkaleido-runner --programs fibonacci --post-to-gh --github-token token --pr-number 42 --commit-hash 0123456789abcdef
```

## What the package does not do

- It makes no real cryptographic proofs. The only host included is
  `NativeHost`, whose proofs are empty and whose verification accepts every
  receipt. `ZkVm.SP1` and `ZkVm.RISC0` name backends, but no hosts for them
  are included.
- `NativeHost` is not a `ZkVmHostPerf`, so it cannot produce performance
  reports.
- The `zkaleido-runner` command has no backend registered: it prints only
  the report header and exits with status 0. To get result tables, call
  `zkaleido.runner.main.run` with your own backends.