# mitpair

Tools for pairing and mobbing with git. You give the people you work with
short initials, then name who is at the keyboard. The first person is made
the git author (`user.name`, `user.email` and, if set, `user.signingkey`),
and the others are saved as co-authors. An issue reference can be saved for
a `Relates-to` trailer as well. Both settings expire after a while, so stale
pairs do not linger.

## Installation

```sh
pip install mitpair
```

This installs the commands `git-mit`, `git-mit-config`, `git-mit-relates-to`,
`git-mit-install` and `mit-pre-commit`. Git runs any `git-<name>` program on
your `PATH` as `git <name>`, so they are used as `git mit`, `git mit-config`
and so on. `git-mit`, `git-mit-relates-to` and `mit-pre-commit` must be run
inside a git repository.

## Saving authors

Give each person a set of initials, a name, an e-mail address and,
optionally, a signing key:

```sh
git mit-config mit set bt "Billie Thompson" billie@example.com
git mit-config mit set se "Someone Else" someone@example.com
```

These are stored under `mit.author.config.<initials>` in the repository's
git configuration. Add `--scope global` to store them in your global git
configuration instead.

## Saying who is coding

```sh
git mit bt se
```

The first initials become the author; the rest are saved as co-authors
under `mit.author.coauthors.<n>`, replacing any from before. Initials that
are not known are reported, with the unknown ones marked in the command
line. The setting expires after 60 minutes; change that with `--timeout`
(or `GIT_MIT_AUTHORS_TIMEOUT`), in minutes:

```sh
git mit --timeout 120 bt se
```

If the repository's `commit-msg` hook does not point at `mit-commit-msg`,
`git mit` prints a warning suggesting `git mit-install`.

## Relates-to

```sh
git mit-relates-to "[#134]"
```

The value is saved as `mit.relate.to` and expires after 60 minutes by
default; `--timeout` or `GIT_MIT_RELATES_TO_TIMEOUT` change the number of
minutes.

A template for the trailer, with a single `{ value }` placeholder, can be
saved as `mit.relate.template`:

```sh
git mit-config relates-to template "[{ value }]"
```

Without an argument the template is taken from
`GIT_MIT_RELATES_TO_TEMPLATE`, or else is `{ value }`. `--scope global`
saves it in your global configuration.

## Keeping authors in a file

Authors are also read from a file, by default
`$HOME/.config/git-mit/mit.toml` (`%APPDATA%\git-mit\mit.toml` on Windows).
The file may be YAML or TOML. Authors saved in the git configuration take
precedence over those in the file. To write every author you know into the
file:

```sh
mkdir -p "$HOME/.config/git-mit"
git mit-config mit generate > "$HOME/.config/git-mit/mit.toml"
```

To see an example file:

```sh
git mit-config mit example
```

```toml
[ae]
name = "Anyone Else"
email = "anyone@example.com"

[bt]
name = "Billie Thompson"
email = "billie@example.com"
signingkey = "0A46826A"

[se]
name = "Someone Else"
email = "someone@example.com"
```

To list every author as a table:

```sh
git mit-config mit available
```

`git mit`, `git mit-config mit generate` and `git mit-config mit available`
take `--config` (or `GIT_MIT_AUTHORS_CONFIG`) for another file, and
`--exec` (or `GIT_MIT_AUTHORS_EXEC`) to run a command and read the authors
from what it prints. When both are given, the command wins.

## Installing the hooks

```sh
git mit-install
```

This links `mit-prepare-commit-msg`, `mit-pre-commit` and `mit-commit-msg`,
found on your `PATH`, into the repository's hooks directory. It refuses to
replace a hook that is already there. With `--scope=global` the hooks go
into the git template directory (`init.templatedir`, set to
`~/.config/git/init-template` if it is not set yet), so new clones and
`git init` pick them up.

## The pre-commit check

`mit-pre-commit` stops a commit when nobody has been set with `git mit`, or
when the last setting has expired, and says how to fix it.

## What this package does not do

- It provides `mit-pre-commit` but no `mit-prepare-commit-msg` or
  `mit-commit-msg`. `git mit-install` needs all three on your `PATH` and
  stops with an error when one is missing.
- Nothing here writes `Co-authored-by` or `Relates-to` trailers into a
  commit message, or applies the saved relates-to template; the saved
  settings are for a `prepare-commit-msg` hook to use.
- There are no commit message lints, and `git mit-config` has no `lint`
  commands.

## Shell completion

Every command accepts `--completion` with one of `bash`, `elvish`, `fish`,
`powershell` or `zsh`, and prints a short completion script for its options.

## Error output

Errors are printed to stderr with a code, help and, where there is one, the
offending text marked. Colour is used only on a terminal, and is turned off
by `NO_COLOR` or `DEBUG_PRETTY_ERRORS`.