import re
from collections import OrderedDict
from typing import Dict, List, Tuple

from ..errors import InvalidProblemError
from ..schemas import Constraint, LPProblem, ObjectiveFunction

_TOKEN_SPLIT = re.compile(r",|;|\band\b", re.IGNORECASE)
_COMPARATOR = re.compile(r"(<=|>=|==|=|≤|≥)")
_IDENTIFIER = re.compile(r"^[A-Za-z_][\w]*$")
_MULTI_BOUND = re.compile(
    r"^([A-Za-z_][\w]*(?:\s*,\s*[A-Za-z_][\w]*)*)\s*(<=|>=|≤|≥)\s*([+-]?\d+(?:\.\d+)?)$"
)
_TERM_PATTERN = re.compile(r"([+-]?\s*\d*\.?\d*)\s*\*?\s*([A-Za-z_][\w]*)")
_NUMBER_PATTERN = re.compile(r"[+-]?\s*\d+(?:\.\d+)?")
_CANONICAL = ("x1", "x2")


def parse_graphical_spec(spec: str) -> LPProblem:
    """
    Small rule-based parser for two-variable textbook LPs such as:
      "maximize 3x1 + 5x2 subject to x1 <= 4, 2x2 <= 12, 3x1 + 2x2 <= 18, x1,x2 >= 0"
    Sign restrictions on the decision variables are absorbed into the non-negativity flag.
    Other bounds on a variable list (e.g. "x1, x2 <= 5") become one constraint per variable.
    """

    if not spec or not spec.strip():
        raise InvalidProblemError("Specification is empty.")

    normalized = " ".join(spec.replace("\n", " ").split())
    pieces = re.split(r"subject to|such that|s\.t\.", normalized, flags=re.IGNORECASE)
    objective_part = pieces[0].strip()
    constraints_part = pieces[1].strip() if len(pieces) > 1 else ""

    match = re.match(r"(maximize|minimize|max|min)\s*(?:z\s*=)?\s*(.*)", objective_part, flags=re.IGNORECASE)
    if not match:
        raise InvalidProblemError("Objective must start with 'maximize' or 'minimize'.")
    sense = "max" if match.group(1).lower().startswith("max") else "min"
    objective_text = match.group(2).strip()
    if not objective_text:
        raise InvalidProblemError("Objective expression is missing.")

    objective_coeffs, _ = _parse_linear_expr(objective_text)
    names: "OrderedDict[str, None]" = OrderedDict((name, None) for name in objective_coeffs)

    tokens = [tok.strip() for tok in _TOKEN_SPLIT.split(constraints_part) if tok.strip()]
    parsed_rows: List[Tuple[Dict[str, float], str, float]] = []

    for token in _merge_variable_lists(tokens):
        bound = _MULTI_BOUND.match(token)
        if bound:
            vars_chunk, cmp_text, rhs_text = bound.groups()
            cmp = _normalize_cmp(cmp_text)
            rhs_value = float(rhs_text)
            for name in [v.strip() for v in vars_chunk.split(",")]:
                names.setdefault(name, None)
                # Sign restrictions are carried by the non-negativity flag.
                if cmp == ">=" and rhs_value == 0:
                    continue
                parsed_rows.append(({name: 1.0}, cmp, rhs_value))
            continue
        if "," in token:
            raise InvalidProblemError(f"Could not parse variable list '{token}'.")

        comp_match = _COMPARATOR.search(token)
        if not comp_match:
            raise InvalidProblemError(f"Could not parse constraint segment '{token}'.")
        lhs_text = token[: comp_match.start()].strip()
        rhs_text = token[comp_match.end() :].strip()
        if not lhs_text or not rhs_text:
            raise InvalidProblemError(f"Incomplete constraint expression '{token}'.")
        coeffs, constant = _parse_linear_expr(lhs_text)
        try:
            rhs_value = float(rhs_text)
        except ValueError as exc:
            raise InvalidProblemError(f"Right-hand side '{rhs_text}' is not numeric.") from exc
        parsed_rows.append((coeffs, _normalize_cmp(comp_match.group(1)), rhs_value - constant))
        for name in coeffs:
            names.setdefault(name, None)

    position = _assign_positions(list(names))

    constraints = [
        Constraint(
            coef_x1=_coefficient(coeffs, position, 0),
            coef_x2=_coefficient(coeffs, position, 1),
            cmp=cmp,
            rhs=rhs,
        )
        for coeffs, cmp, rhs in parsed_rows
    ]
    objective = ObjectiveFunction(
        coef_x1=_coefficient(objective_coeffs, position, 0),
        coef_x2=_coefficient(objective_coeffs, position, 1),
        sense=sense,
    )
    return LPProblem(objective=objective, constraints=constraints, non_negativity=True)


def _merge_variable_lists(tokens: List[str]) -> List[str]:
    # "x1, x2 >= 0" is split on the comma; glue bare names back onto the next segment.
    merged: List[str] = []
    pending: List[str] = []
    for token in tokens:
        if _IDENTIFIER.match(token):
            pending.append(token)
            continue
        if pending:
            token = ", ".join(pending + [token])
            pending = []
        merged.append(token)
    if pending:
        raise InvalidProblemError(f"Dangling variable list '{', '.join(pending)}'.")
    return merged


def _assign_positions(names: List[str]) -> Dict[str, int]:
    if len(names) > 2:
        raise InvalidProblemError(
            f"The graphical method handles two decision variables, found {len(names)}: {', '.join(names)}."
        )
    if all(name.lower() in _CANONICAL for name in names):
        return {name: _CANONICAL.index(name.lower()) for name in names}
    return {name: idx for idx, name in enumerate(names)}


def _coefficient(coeffs: Dict[str, float], position: Dict[str, int], slot: int) -> float:
    return sum(coef for name, coef in coeffs.items() if position[name] == slot)


def _normalize_cmp(cmp: str) -> str:
    return {"=": "==", "≤": "<=", "≥": ">="}.get(cmp, cmp)


def _parse_linear_expr(expr_str: str) -> Tuple[Dict[str, float], float]:
    coeffs: "OrderedDict[str, float]" = OrderedDict()
    spans: List[Tuple[int, int]] = []

    for match in _TERM_PATTERN.finditer(expr_str):
        coef_text = match.group(1).replace(" ", "")
        name = match.group(2)
        if coef_text in ("", "+"):
            coef = 1.0
        elif coef_text == "-":
            coef = -1.0
        else:
            coef = float(coef_text)
        coeffs[name] = coeffs.get(name, 0.0) + coef
        spans.append(match.span())

    remaining = list(expr_str)
    for start, end in spans:
        for idx in range(start, end):
            remaining[idx] = " "

    constant = 0.0
    for num_match in _NUMBER_PATTERN.finditer("".join(remaining)):
        text = num_match.group(0).replace(" ", "")
        if text:
            constant += float(text)

    return OrderedDict((name, coef) for name, coef in coeffs.items() if abs(coef) > 1e-12), constant
