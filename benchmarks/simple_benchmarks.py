from timeit import timeit

from put.evaluation.evaluator import evaluate
from put.reader.lexer import tokenize
from put.reader.parser import parse_tokens
from put.types.environment import Environment


def time_phases(code: str, rounds: int) -> tuple[float, float, float]:
    """Time lexing, parsing and evaluation separately on the same source."""
    tokens = tokenize(code)
    program = parse_tokens(tokens)
    # Warmup
    evaluate(program, Environment())
    t_lex = timeit(lambda: tokenize(code), number=rounds)
    t_parse = timeit(lambda: parse_tokens(tokens), number=rounds)
    t_eval = timeit(lambda: evaluate(program, Environment()), number=rounds)
    return t_lex, t_parse, t_eval


SCALAR_CODE = "var x = (42 + 5) * 2 - 3 / 1.5; var y = x * x - x / 3; y + x;"

# Long left-associative chain: stresses the parser's folding loop
CHAIN_CODE = "var s = " + " + ".join(str(i) for i in range(500)) + ";"

TENSOR_CODE = """
var t1 = Tensor([1.0,2.0,3.0,4.0],[2,2]);
var t2 = Tensor([5.0,6.0,7.0,8.0],[2,2]);
var t3 = t1 + t2;
var m = matmul(t3, transpose(t1));
mean(m) + std(m);
"""

BIG_TENSOR_CODE = (
    "var a = zeros([64, 64]); var b = zeros([64, 64]); "
    "var c = matmul(add(a, b), b); variance(c);"
)


def _print_phases(name: str, code: str, rounds: int) -> None:
    t_lex, t_parse, t_eval = time_phases(code, rounds)
    print(f"Benchmark: {name}")
    print(f"  lex: {t_lex:.6f}s  |  parse: {t_parse:.6f}s  |  eval: {t_eval:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    _print_phases("scalar arithmetic", SCALAR_CODE, rounds=5000)
    _print_phases("500-term addition chain", CHAIN_CODE, rounds=200)
    _print_phases("small tensor program", TENSOR_CODE, rounds=2000)
    _print_phases("64x64 zeros matmul", BIG_TENSOR_CODE, rounds=200)
