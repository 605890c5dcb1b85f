"""
Format the totals of several rolls as an ASCII table.

String formatting reference:
  https://pyformat.info/#string_pad_align
"""
from __future__ import absolute_import, print_function


def max_col_width(lines):
    """
    Iterate all lines and entries.

    Returns: A list of numbers, the max width required for each
             column given the data.
    """
    return [max(len(line[ind]) for line in lines) for ind in range(len(lines[0]))]


def format_line(entries, sep=' | ', pads=None, center=False):
    """
    Format data for use in a simple table output to text.

    args:
        entries: List of data to put in table, left to right.
        sep: String to separate data with.
        pads: List of numbers, pad each entry as you go with this number.
        center: Center the entry, otherwise left aligned.
    """
    align = '^' if center else '<'
    if pads:
        ents = ["{:{}{}}".format(str(ent), align, pad) for ent, pad in zip(entries, pads)]
    else:
        ents = [str(ent) for ent in entries]

    return sep.join(ents).rstrip()


def format_table(lines, sep=' | ', center=False, header=False):
    """
    Format a table that fits all data evenly.
    Each column is as wide as its largest entry.

    args:
        lines: Each top level element is a line composed of data in a list.
        sep: String to separate data with.
        center: Center the entry, otherwise left aligned.
        header: If true, format first line as a centered header with a divider.
    """
    lines = [[str(data) for data in line] for line in lines]
    pads = max_col_width(lines)

    rows = []
    if header:
        rows += [format_line(lines[0], sep=sep, pads=pads, center=True),
                 format_line(['-' * pad for pad in pads], sep=sep)]
        lines = lines[1:]

    rows += [format_line(line, sep=sep, pads=pads, center=center) for line in lines]

    return '\n'.join(rows)


def totals_table(roll_sets):
    """
    Summarize the group totals of rolled sets, one row per set.

    args:
        roll_sets: A list of rolled RollSets, all parsed from the same notation.

    Returns:
        The formatted table, expressions are numbered from 1.
    """
    width = max(len(roll_set) for roll_set in roll_sets)
    lines = [['Roll'] + [f'Expr {num}' for num in range(1, width + 1)]]
    for num, roll_set in enumerate(roll_sets, start=1):
        totals = roll_set.group_totals()
        lines += [[num] + totals + [''] * (width - len(totals))]

    return format_table(lines, header=True)
