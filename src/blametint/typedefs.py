type Author = str  # type: ignore
type Email = str  # type: ignore
type FileStr = str  # type: ignore

type OID = str  # type: ignore  # Object ID = long commit SHA, 40 chars
type SHA = str  # type: ignore # short commit SHA, often 7 chars

# Raw output of git blame --porcelain
type BlameStr = str  # type: ignore

type LineNr = int  # type: ignore  # 1-based line number in the blamed file
type Timestamp = int  # type: ignore  # milliseconds since epoch
type ColorToken = str  # type: ignore  # CSS color, e.g. "#ff000080"
