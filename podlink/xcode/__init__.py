from podlink.xcode.project import XcodeProject
from podlink.xcode.workspace import XcodeWorkspace
