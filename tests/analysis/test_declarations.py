"""Tests for analysis.declarations — classes and the module container."""

from structscan.analysis.declarations import extract_module_type, extract_types, split_bases
from structscan.analysis.lines import LineIndex
from structscan.analysis.models import MemberKind, TypeKind


class TestSplitBases:
    """Test base list parsing."""

    def test_primary_and_interfaces(self):
        assert split_bases("Base, MixinA,  MixinB ") == ("Base", ["MixinA", "MixinB"])

    def test_single_base(self):
        assert split_bases("models.Model") == ("models.Model", [])

    def test_no_bases(self):
        assert split_bases(None) == (None, [])
        assert split_bases("") == (None, [])
        assert split_bases(" , ") == (None, [])


class TestExtractTypes:
    """Test class declaration extraction."""

    def test_class_with_bases_and_methods(self):
        source = '''import os


class UserService(BaseService, LoggingMixin):
    """Manage users."""

    def create(self, name):
        return self.repo.add(name)

    def delete(self, user_id):
        pass


CONSTANT = 1
'''
        types, sites = extract_types(LineIndex(source), "/repo/user_service.py")

        assert len(types) == 1
        service = types[0]
        assert service.name == "UserService"
        assert service.full_name == "UserService"
        assert service.kind == TypeKind.CLASS
        assert service.base_type == "BaseService"
        assert service.interfaces == ["LoggingMixin"]
        assert service.docstring == "Manage users."
        assert service.start_line == 4
        assert service.end_line == 13
        assert [m.name for m in service.members] == ["create", "delete"]
        assert all(m.kind == MemberKind.METHOD for m in service.members)
        assert [(s.called_type, s.called_member) for s in sites] == [("self.repo", "add")]

    def test_class_ends_before_next_top_level_declaration(self):
        source = """class First:
    def a(self):
        pass
    def b(self):
        pass

class Second:
    pass
"""
        types, _ = extract_types(LineIndex(source), "x.py")

        assert [(t.name, t.start_line, t.end_line) for t in types] == [
            ("First", 1, 6),
            ("Second", 7, 8),
        ]

    def test_class_without_bases(self):
        source = "class Plain:\n    x = 1\n"
        types, _ = extract_types(LineIndex(source), "x.py")

        assert types[0].base_type is None
        assert types[0].interfaces == []
        assert types[0].docstring is None
        assert types[0].members == []

    def test_empty_parentheses(self):
        types, _ = extract_types(LineIndex("class Empty():\n    pass\n"), "x.py")
        assert types[0].base_type is None

    def test_one_line_class(self):
        types, _ = extract_types(LineIndex("class Marker: pass\nx = 1\n"), "x.py")
        assert (types[0].start_line, types[0].end_line) == (1, 1)
        assert types[0].members == []

    def test_nested_class_is_not_a_type(self):
        source = """class Article(models.Model):
    title = models.CharField()

    class Meta:
        ordering = ["title"]

    def __str__(self):
        return self.title
"""
        types, _ = extract_types(LineIndex(source), "models.py")

        assert [t.name for t in types] == ["Article"]
        assert [m.name for m in types[0].members] == ["__str__"]

    def test_indented_class_ignored(self):
        source = "if TYPE_CHECKING:\n    class Hidden:\n        pass\n"
        types, _ = extract_types(LineIndex(source), "x.py")
        assert types == []

    def test_wrapped_base_list(self):
        source = "class Combined(\n    First,\n    Second,\n):\n    def run(self):\n        pass\n"
        types, _ = extract_types(LineIndex(source), "x.py")

        assert types[0].base_type == "First"
        assert types[0].interfaces == ["Second"]
        assert types[0].end_line == 6
        assert [m.name for m in types[0].members] == ["run"]

    def test_tab_indented_body(self):
        source = "class Tabs:\n\tdef run(self):\n\t\treturn 1\n"
        types, _ = extract_types(LineIndex(source), "x.py")
        assert [m.name for m in types[0].members] == ["run"]

    def test_malformed_class_does_not_stop_extraction(self):
        source = "class Broken(:\n    pass\n\nclass Fine:\n    def ok(self):\n        pass\n"
        types, _ = extract_types(LineIndex(source), "x.py")
        assert [t.name for t in types] == ["Fine"]


class TestExtractModuleType:
    """Test the synthetic module container."""

    def test_module_functions_collected(self):
        source = "import sys\n\n\ndef main():\n    run(sys.argv)\n\n\ndef run(args):\n    pass\n"
        module_type, sites = extract_module_type(LineIndex(source), "cli.py", "/repo/cli.py")

        assert module_type is not None
        assert module_type.name == "cli"
        assert module_type.kind == TypeKind.MODULE
        assert (module_type.start_line, module_type.end_line) == (1, 9)
        assert [m.name for m in module_type.members] == ["main", "run"]
        assert all(m.kind == MemberKind.FUNCTION for m in module_type.members)
        assert [(s.caller_type, s.called_type, s.called_member) for s in sites] == [
            ("cli", "cli", "run")
        ]

    def test_no_functions(self):
        module_type, sites = extract_module_type(LineIndex("class A:\n    pass\n"), "a.py", "a.py")
        assert module_type is None
        assert sites == []

    def test_empty_file(self):
        assert extract_module_type(LineIndex(""), "a.py", "a.py") == (None, [])
