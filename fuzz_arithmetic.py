import random
import re
import string
import warnings

from intcalc.runtime import evaluate

warnings.filterwarnings("ignore")


def eval_py(code: str) -> int | str:
    try:
        return eval(code)
    except Exception as e:
        return str(e)


def eval_my(code: str) -> int | str:
    try:
        return evaluate(code)
    except Exception as e:
        return str(e)


if __name__ == "__main__":
    alphabet = string.digits + "()+-* "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers, python's are right-associative (2**3**2)

        if re.findall(r"[\d)]\s*\(", code):
            continue  # avoid implicit multiplication (2(3)), python calls the number instead

        if re.findall(r"\(\s*\)", code):
            continue  # avoid empty parenthesis, python reads them as a tuple

        if re.findall(r"\b0\d", code):
            continue  # avoid octal literals (017)

        res_py = eval_py(code)
        res_my = eval_my(code)
        if isinstance(res_py, int) and isinstance(res_my, int) and res_py == res_my:
            continue
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
