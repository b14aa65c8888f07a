from typing import List

from ..api.reports import Report


def emit(reports: List[Report]) -> str:
    lines = []
    for rep in reports:
        s = rep.get_summary()
        where = f"{rep.get_namespace()}/{rep.get_name()}" if rep.get_namespace() else rep.get_name()
        lines.append(
            f"{rep.kind} {where} [{rep.get_source() or '-'}] "
            f"pass={s.pass_} fail={s.fail} warn={s.warn} error={s.error} skip={s.skip}"
        )
        for r in rep.get_results():
            res = r.get_resource()
            target = f"{res.kind}/{res.name}" if res is not None else "-"
            status = getattr(r.result, "value", r.result) or "-"
            line = (
                f"  [{(str(r.priority) or '-').upper()}] {status} {r.policy}/{r.rule or '-'} "
                f":: {target} :: {r.message or ''} ({r.get_id()})"
            )
            if r.timestamp is not None:
                line += f" @ {r.timestamp.to_datetime().isoformat()}"
            lines.append(line)
    return "\n".join(lines)
