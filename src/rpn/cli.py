"""Интерактивный RPN калькулятор: цикл чтения строк из потока ввода.

Некорректные выражения сообщаются как "error: ..." и цикл продолжается.
Нарушение инварианта ядра (InvariantViolation) не перехватывается и
завершает процесс с диагностикой.
"""

import logging
import sys
from argparse import ArgumentParser
from typing import List, Optional, TextIO

from src.core.logging_config import setup_logging
from src.core.math.errors import NumberParseError
from src.rpn.config import EvaluatorConfig
from src.rpn.evaluator import RPNEvaluator
from src.rpn.stack import ExpressionError

logger = logging.getLogger(__name__)

BANNER = """\
******************************************************************
*** Welcome to the exact rational calculator!
*** Sample expressions: 1 2 * -3 *
***                     1000 ! 99 ! /
***                     1 2 / 2 14 ^ ^
***                     -3/5 -11/7 +
*** Rules:
*** - enter expressions in postfix (i.e. Reverse Polish Notation)
*** - tokens are separated by whitespace
*** - binary operators: +, -, *, /, and ^ (basic arithmetic)
*** - unary operators: ! (takes factorial)
*** - fraction literals look like p/q, negatives like -x
*** - use % in place of an integer/fraction to access the result of the
***   last expression to be evaluated
*** - enter quit to quit
******************************************************************"""


def run_repl(
    config: EvaluatorConfig,
    input_stream: TextIO,
    output_stream: TextIO,
) -> int:
    """Цикл чтения/вычисления/печати.

    Args:
        config: конфигурация калькулятора
        input_stream: источник строк (одна строка за итерацию)
        output_stream: поток для приглашения, результатов и ошибок

    Returns:
        Код завершения (0 при quit или конце ввода)
    """
    evaluator = RPNEvaluator(config)

    if config.show_banner:
        print(BANNER, file=output_stream)

    while True:
        output_stream.write(config.prompt)
        output_stream.flush()

        raw = input_stream.readline()
        if not raw:
            logger.info("end of input")
            return 0

        line = raw.rstrip("\r\n")
        if not line.strip():
            continue

        try:
            result = evaluator.evaluate_line(line)
        except (ExpressionError, NumberParseError) as e:
            logger.warning("rejected expression: %s", e, extra={"line": line})
            print(f"error: {e}", file=output_stream)
            continue

        if result.quit_requested:
            return 0

        if config.echo_results:
            print(result.value, file=output_stream)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="bigfrac",
        description="Exact rational calculator using Reverse Polish Notation",
    )
    parser.add_argument("--prompt", default="> ", help="input prompt")
    parser.add_argument("--no-banner", action="store_true", help="do not print the welcome banner")
    parser.add_argument("--quiet", action="store_true", help="do not echo results")
    parser.add_argument("--log-level", default="WARNING", help="logging level")
    parser.add_argument("--log-format", choices=("json", "text"), default="json")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = EvaluatorConfig(
        prompt=args.prompt,
        show_banner=not args.no_banner,
        echo_results=not args.quiet,
        log_level=args.log_level,
        log_format=args.log_format,
    )
    setup_logging(level=config.log_level, log_format=config.log_format)
    return run_repl(config, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
