from __future__ import annotations

import pytest

from gofuncdetect import Detector, check_file
from gofuncdetect.catalog import CATALOG, CE_IMPORT, CONTEXT, ERROR, EVENT, RECOMMENDED_ALIASES
from gofuncdetect.errors import ParseError
from gofuncdetect.model import FunctionDetails, Signature

RECOMMENDED_IMPORTS = """import (
	"context"
	event "github.com/cloudevents/sdk-go/v2"
	"github.com/cloudevents/sdk-go/v2/protocol"
)
"""


@pytest.mark.parametrize("sig", CATALOG, ids=[s.render(RECOMMENDED_ALIASES) for s in CATALOG])
def test_every_catalog_shape_is_detected(go_file, sig: Signature):
    # `func(event.Event) error` -> `func Receive(event.Event) error {}`
    shape = sig.render(RECOMMENDED_ALIASES)[len("func") :]
    src = go_file(f"func Receive{shape} {{\n\tpanic(\"unused\")\n}}\n", imports=RECOMMENDED_IMPORTS)

    details = check_file("fn.go", src)
    assert details == FunctionDetails(name="Receive", package="widgets", signature=sig)


def test_context_event_error_handler(go_file):
    src = go_file(
        """// Receive handles one event.
func Receive(ctx context.Context, e cloudevents.Event) error {
	return nil
}
"""
    )
    details = check_file("widgets.go", src)
    assert details is not None
    assert details.name == "Receive"
    assert details.package == "widgets"
    assert details.signature == Signature(inputs=(CONTEXT, EVENT), outputs=(ERROR,))


def test_unexported_function_is_never_returned(go_file):
    src = go_file("func receive(ctx context.Context, e cloudevents.Event) error {\n\treturn nil\n}\n")
    assert check_file("fn.go", src) is None


def test_methods_and_generic_functions_are_not_entry_points(go_file):
    src = go_file(
        """type Server struct{}

func (s *Server) Receive(e cloudevents.Event) {}

func Handle[T any](e cloudevents.Event) {}
"""
    )
    assert check_file("fn.go", src) is None


def test_first_supported_function_in_source_order_wins(go_file):
    src = go_file(
        """func Helper(s string) string { return s }

func First(e cloudevents.Event) {}

func Second(ctx context.Context, e cloudevents.Event) protocol.Result { return nil }
"""
    )
    details = check_file("fn.go", src)
    assert details is not None
    assert details.name == "First"


def test_name_filter_selects_matching_function(go_file):
    src = go_file(
        """func First(e cloudevents.Event) {}

func Second(ctx context.Context, e cloudevents.Event) protocol.Result { return nil }
"""
    )
    details = check_file("fn.go", src, name_filter="Second")
    assert details is not None
    assert details.name == "Second"


def test_name_filter_without_matching_function_is_absent(go_file):
    src = go_file("func Receive(e cloudevents.Event) {}\n")
    assert check_file("fn.go", src, name_filter="Receiver") is None


def test_name_filter_does_not_accept_unsupported_signature(go_file):
    src = go_file("func Receiver(s string) {}\n\nfunc Handle(e cloudevents.Event) {}\n")
    assert check_file("fn.go", src, name_filter="Receiver") is None


def test_unnamed_import_uses_last_path_segment(go_file):
    imports = 'import "github.com/cloudevents/sdk-go/v2"\n'
    assert check_file("fn.go", go_file("func Receive(e v2.Event) {}\n", imports=imports)) is not None
    assert check_file("fn.go", go_file("func Receive(e cloudevents.Event) {}\n", imports=imports)) is None


def test_declared_package_names_fix_unnamed_import(go_file):
    imports = 'import "github.com/cloudevents/sdk-go/v2"\n'
    src = go_file("func Receive(e cloudevents.Event) {}\n", imports=imports)
    detector = Detector(package_names={CE_IMPORT: "cloudevents"})
    details = detector.check_file("fn.go", src)
    assert details is not None
    assert details.signature == Signature(inputs=(EVENT,))


def test_type_from_other_package_named_event_is_not_accepted(go_file):
    imports = 'import cloudevents "example.com/not/cloudevents"\n'
    assert check_file("fn.go", go_file("func Receive(e cloudevents.Event) {}\n", imports=imports)) is None


def test_custom_catalog(go_file):
    only_error = (Signature(inputs=(EVENT,), outputs=(ERROR,)),)
    detector = Detector(only_error)
    src = go_file("func A(e cloudevents.Event) {}\n\nfunc B(e cloudevents.Event) error { return nil }\n")
    details = detector.check_file("fn.go", src)
    assert details is not None
    assert details.name == "B"


def test_malformed_source_raises_parse_error(go_file):
    src = go_file("func Receive(e cloudevents.Event {\n}\n")
    with pytest.raises(ParseError) as ei:
        check_file("broken.go", src)
    assert ei.value.path == "broken.go"
    assert str(ei.value).startswith("broken.go:")


@pytest.mark.parametrize(
    "body",
    [
        "func Receive(e cloudevents.Event) {\n\tx := := 1\n}\n",
        "func Receive(e cloudevents.Event) {\n\treturn +\n}\n",
    ],
    ids=["double-define", "dangling-operator"],
)
def test_supported_function_with_invalid_body_raises_parse_error(go_file, body: str):
    with pytest.raises(ParseError):
        check_file("broken.go", go_file(body))


@pytest.mark.parametrize(
    "decl",
    ["var = = 3\n", "type struct struct\n"],
    ids=["var", "type"],
)
def test_invalid_declaration_before_supported_function_raises_parse_error(go_file, decl: str):
    src = go_file(decl + "\nfunc Receive(e cloudevents.Event) {}\n")
    with pytest.raises(ParseError):
        check_file("broken.go", src)
