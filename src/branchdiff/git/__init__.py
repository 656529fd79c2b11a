"""Git utilities for branchdiff."""

from branchdiff.git.branches import BranchScope, list_branches
from branchdiff.git.materializer import MaterializeError, download_changed_files
from branchdiff.git.schemas import ChangeAction, ChangeFilter, ChangeSummary, FileChange
from branchdiff.git.tree_diff import (
	compare_branches,
	get_all_changed_files,
	get_file_changes,
	get_modified_files,
	summarize_changes,
)
from branchdiff.git.utils import (
	BranchNotFoundError,
	CloneError,
	FileDeletedOrUnchangedError,
	FileNotInDiffError,
	GitError,
	GitRepoContext,
	NotAGitRepoError,
	PathNotFoundError,
	ReadError,
	RepositoryNotInitializedError,
	RepositoryOpenError,
	TreeSnapshot,
)

__all__ = [
	# Errors
	"BranchNotFoundError",
	# Branches
	"BranchScope",
	# Comparison results
	"ChangeAction",
	"ChangeFilter",
	"ChangeSummary",
	"CloneError",
	"FileChange",
	"FileDeletedOrUnchangedError",
	"FileNotInDiffError",
	"GitError",
	# Repository access
	"GitRepoContext",
	"MaterializeError",
	"NotAGitRepoError",
	"PathNotFoundError",
	"ReadError",
	"RepositoryNotInitializedError",
	"RepositoryOpenError",
	"TreeSnapshot",
	# Operations
	"compare_branches",
	"download_changed_files",
	"get_all_changed_files",
	"get_file_changes",
	"get_modified_files",
	"list_branches",
	"summarize_changes",
]
