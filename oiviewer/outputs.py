"""
Output modes of the viewer: XML description, TSV summary and check report.
"""

from oifits_model import OIFitsChecker, OIFitsFile, get_csv_desc, get_xml_desc

from . import ViewerContext, command


@command("xml", "XML description of the file (default)", flags=("-x", "--xml"))
def run_xml(ctx: ViewerContext, oifits: OIFitsFile, checker: OIFitsChecker) -> str:
    return get_xml_desc(oifits, ctx.format, ctx.verbose, checker if ctx.check_report else None)


@command("tsv", "tab-separated summary per target", flags=("-t", "--tsv", "--csv"))
def run_tsv(ctx: ViewerContext, oifits: OIFitsFile, checker: OIFitsChecker) -> str:
    return get_csv_desc(oifits, ctx.format, ctx.verbose)


@command("check", "check report only", flags=("-c", "--check"))
def run_check(ctx: ViewerContext, oifits: OIFitsFile, checker: OIFitsChecker) -> str:
    report = checker.get_report()
    return report + "\n" if report else ""
