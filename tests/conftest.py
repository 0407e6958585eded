# the package is written against a running Sage session
import sage.all
