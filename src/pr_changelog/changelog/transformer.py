"""
Pattern Rewriter

Compiles configured transformers into regular expressions and applies them
to rendered pull request text.
"""

import re
import logging
from typing import List, Optional

from ..models.changelog import CompiledRule, CompileOutcome
from ..models.configuration import Transformer


logger = logging.getLogger(__name__)

DIGITS = "0123456789"


DEFAULT_TRANSFORMERS: List[Transformer] = []


def compile_transformer(transformer: Transformer) -> CompileOutcome:
    """
    Compile one transformer.

    Doubled backslashes in the pattern are collapsed first, since
    configuration files often escape them twice.

    Args:
        transformer: Configured rule

    Returns:
        CompileOutcome holding either the compiled rule or the error message
    """
    source = transformer.pattern.replace('\\\\', '\\')
    try:
        pattern = re.compile(source)
    except (re.error, OverflowError, RecursionError) as e:
        return CompileOutcome(source=transformer.pattern, error=str(e))
    return CompileOutcome(
        source=transformer.pattern,
        rule=CompiledRule(pattern=pattern, target=transformer.target),
    )


def validate_transformers(transformers: Optional[List[Transformer]]) -> List[CompiledRule]:
    """
    Compile all configured transformers, dropping the ones that fail.

    Args:
        transformers: Configured rules, or None for the built-in defaults

    Returns:
        Compiled rules in configuration order
    """
    if transformers is None:
        transformers = DEFAULT_TRANSFORMERS

    outcomes = [compile_transformer(t) for t in transformers]
    for outcome in outcomes:
        if not outcome.ok:
            logger.warning(f"Bad replacer regex: {outcome.source} ({outcome.error})")

    return [outcome.rule for outcome in outcomes if outcome.ok]


def expand_target(target: str, match: re.Match) -> str:
    """
    Expand a replacement string for one match.

    Supports $$, $&, $` and $' (text before and after the match), $1 to $99
    and $<name>. References that don't resolve stay literal; groups that
    did not participate in the match expand to an empty string.
    """
    if '$' not in target:
        return target

    group_count = match.re.groups
    named = match.re.groupindex
    parts = []
    i = 0
    length = len(target)

    while i < length:
        char = target[i]
        if char != '$' or i + 1 >= length:
            parts.append(char)
            i += 1
            continue

        nxt = target[i + 1]
        if nxt == '$':
            parts.append('$')
            i += 2
        elif nxt == '&':
            parts.append(match.group(0))
            i += 2
        elif nxt == '`':
            parts.append(match.string[:match.start()])
            i += 2
        elif nxt == "'":
            parts.append(match.string[match.end():])
            i += 2
        elif nxt in DIGITS:
            two = target[i + 1:i + 3]
            if len(two) == 2 and two[1] in DIGITS and 1 <= int(two) <= group_count:
                parts.append(match.group(int(two)) or '')
                i += 3
            elif 1 <= int(nxt) <= group_count:
                parts.append(match.group(int(nxt)) or '')
                i += 2
            else:
                parts.append(char)
                i += 1
        elif nxt == '<' and named:
            close = target.find('>', i + 2)
            if close == -1:
                parts.append(char)
                i += 1
            else:
                name = target[i + 2:close]
                parts.append((match.group(name) or '') if name in named else '')
                i = close + 1
        else:
            parts.append(char)
            i += 1

    return ''.join(parts)


def apply_rule(text: str, rule: CompiledRule) -> str:
    """Replace every match of one rule."""
    return rule.pattern.sub(lambda m: expand_target(rule.target, m), text)


def transform(text: str, rules: List[CompiledRule]) -> str:
    """
    Apply compiled rules in order, each one to the previous result.

    Args:
        text: Rendered pull request text
        rules: Compiled rules from validate_transformers

    Returns:
        Rewritten text
    """
    if not rules:
        return text

    transformed = text
    for rule in rules:
        transformed = apply_rule(transformed, rule)
    return transformed
